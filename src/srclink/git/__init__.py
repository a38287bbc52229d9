"""Git integration module for srclink."""

from srclink.git.cache import RepoCache
from srclink.git.locator import find_repo_root, is_repo_root
from srclink.git.raw_links import rewrite_raw_url
from srclink.git.url_builder import URLBuilder

__all__ = [
    "RepoCache",
    "URLBuilder",
    "find_repo_root",
    "is_repo_root",
    "rewrite_raw_url",
]
