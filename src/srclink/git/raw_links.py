"""Rewrite raw-content links into browsable file links."""

import re

_GITHUB_RAW = re.compile(
    r"https://raw\.githubusercontent\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)/(?P<ref>[^/]+)/(?P<path>.+)"
)


def rewrite_raw_url(url: str, branch: str | None = None) -> str:
    """Turn a raw.githubusercontent.com URL into a github.com blob URL.

    ``branch``, when given, replaces the ref found in the raw URL. URLs
    that do not match are returned unchanged.
    """
    match = _GITHUB_RAW.fullmatch(url)
    if not match:
        return url
    ref = branch or match["ref"]
    return f"https://github.com/{match['owner']}/{match['repo']}/blob/{ref}/{match['path']}"
