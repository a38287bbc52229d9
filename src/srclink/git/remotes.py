"""Extract remote URLs from a repository's ``.git/config``.

Only the subset of the git config grammar needed to list remotes is
understood: section headers and ``url = ...`` entries. Comments,
continuation lines and quoting are not handled, and anything that does
not match is skipped.
"""

import os
import re
from collections.abc import Iterable, Iterator

from srclink.git.locator import GIT_DIR

DEFAULT_REMOTE = "origin"

_REMOTE_SECTION = re.compile(r'\[remote\s+"(.*)"\]')
_URL_PREFIX = "url = "


def parse_remote_urls(text: str) -> Iterator[tuple[str, str]]:
    """Yield (remote name, url) pairs in file order."""
    key = ""
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("["):
            match = _REMOTE_SECTION.fullmatch(line)
            key = match.group(1) if match else ""
        elif key and line.startswith(_URL_PREFIX):
            yield key, line[len(_URL_PREFIX):].strip()


def read_remote_urls(root: str | os.PathLike[str]) -> list[tuple[str, str]]:
    """Read the remotes configured for the repository at ``root``."""
    config_path = os.path.join(root, GIT_DIR, "config")
    if not os.path.isfile(config_path):
        return []
    with open(config_path, encoding="utf-8", errors="replace") as f:
        return list(parse_remote_urls(f.read()))


def select_remote_url(remotes: Iterable[tuple[str, str]]) -> str | None:
    """Pick ``origin`` if present, otherwise the first remote listed."""
    first: str | None = None
    for name, url in remotes:
        if name == DEFAULT_REMOTE:
            return url or None
        if first is None:
            first = url
    return first or None
