"""Source link service."""

import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache

import structlog

from srclink.config.settings import Settings, get_settings
from srclink.core.models.source import FileDetail, SourceLocation
from srclink.git.cache import RepoCache
from srclink.git.raw_links import rewrite_raw_url
from srclink.git.url_builder import URLBuilder

logger = structlog.get_logger(__name__)


class SourceLinkService:
    """Resolves files to their repository and builds "view source" links.

    Safe to share between worker threads: the repository cache is the only
    mutable state and it is thread-safe.
    """

    def __init__(
        self,
        settings: Settings,
        cache: RepoCache | None = None,
        url_builder: URLBuilder | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache if cache is not None else RepoCache(settings)
        self._url_builder = url_builder if url_builder is not None else URLBuilder()

        if settings.environment_branch:
            logger.info("Using branch from environment", branch=settings.environment_branch)

    @property
    def cache(self) -> RepoCache:
        return self._cache

    @property
    def url_builder(self) -> URLBuilder:
        return self._url_builder

    def get_file_detail(self, file_path: str | os.PathLike[str]) -> FileDetail | None:
        """Get the repository URL, branch and relative path of a file."""
        if self._settings.disable_git_features:
            return None

        file_path = os.path.abspath(file_path)
        repo = self._cache.resolve(os.path.dirname(file_path))
        if repo is None:
            return None

        relative_path = os.path.relpath(file_path, repo.root_path)
        return FileDetail(
            repo_url=URLBuilder.normalize_repo_url(repo.remote_url),
            branch=repo.branch,
            relative_path=relative_path.replace("\\", "/"),
        )

    def get_file_details(
        self,
        file_paths: Iterable[str | os.PathLike[str]],
        max_parallelism: int | None = None,
    ) -> dict[str, FileDetail | None]:
        """Resolve many files on a thread pool.

        Keys are the paths as given, converted to str.
        """
        paths = [os.fspath(p) for p in file_paths]
        workers = max(1, max_parallelism or self._settings.max_parallelism)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            details = list(executor.map(self.get_file_detail, paths))
        return dict(zip(paths, details))

    def get_source_url(self, location: SourceLocation) -> str | None:
        """Build the web URL for a source location."""
        return self._url_builder.build(location)

    def get_file_url(self, file_path: str | os.PathLike[str], line: int = 0) -> str | None:
        """Build the web URL for a local file, if it lives in a known repository."""
        detail = self.get_file_detail(file_path)
        if detail is None:
            return None
        return self.get_source_url(detail.to_source_location(line))

    def raw_content_url_to_content_url(self, raw_url: str) -> str:
        """Rewrite a raw-content URL into the browsable file URL."""
        return rewrite_raw_url(raw_url, self._settings.environment_branch)


@lru_cache
def get_source_link_service() -> SourceLinkService:
    """Get the process-wide service built from the cached settings."""
    return SourceLinkService(get_settings())
