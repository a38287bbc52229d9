"""Per-directory cache of resolved repositories."""

import os
import threading
from typing import TYPE_CHECKING

import structlog

from srclink.core.models.source import RepoRecord
from srclink.git.branch import resolve_branch
from srclink.git.locator import is_repo_root
from srclink.git.remotes import read_remote_urls, select_remote_url

if TYPE_CHECKING:
    from srclink.config.settings import Settings

logger = structlog.get_logger(__name__)


class RepoCache:
    """Thread-safe get-or-compute map from directory to RepoRecord.

    Every directory is computed at most once, including directories that
    are not under version control (cached as None). A directory that is
    not a repository root resolves through its parent's entry, so sibling
    directories below a known root cost a single lookup each.

    Locks are taken child first, then parent, so concurrent walks up
    overlapping paths cannot deadlock.
    """

    def __init__(self, settings: "Settings") -> None:
        self._settings = settings
        self._entries: dict[str, RepoRecord | None] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, directory: object) -> bool:
        if not isinstance(directory, (str, os.PathLike)):
            return False
        return os.path.abspath(directory) in self._entries

    def resolve(self, directory: str | os.PathLike[str]) -> RepoRecord | None:
        """Return the repository owning ``directory``, or None."""
        key = os.path.abspath(directory)
        try:
            return self._entries[key]
        except KeyError:
            pass

        with self._lock_for(key):
            if key not in self._entries:
                self._entries[key] = self._compute(key)
            # later callers take the lock-free path above
            with self._locks_guard:
                self._locks.pop(key, None)
            return self._entries[key]

    def clear(self) -> None:
        """Drop every entry.

        Not safe while other threads are resolving.
        """
        with self._locks_guard:
            self._entries.clear()
            self._locks.clear()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _compute(self, directory: str) -> RepoRecord | None:
        if is_repo_root(directory):
            return self._load_record(directory)

        parent = os.path.dirname(directory)
        if parent == directory:
            logger.debug("No repository found", directory=directory)
            return None
        return self.resolve(parent)

    def _load_record(self, root: str) -> RepoRecord | None:
        remote_url = select_remote_url(read_remote_urls(root))
        if not remote_url:
            logger.debug("Repository has no remote URL", root=root)
            return None

        branch = resolve_branch(root, self._settings.environment_branch)
        if not branch:
            logger.debug("Repository branch could not be determined", root=root)
            return None

        logger.debug("Repository resolved", root=root, remote_url=remote_url, branch=branch)
        return RepoRecord(root_path=root, remote_url=remote_url, branch=branch)
