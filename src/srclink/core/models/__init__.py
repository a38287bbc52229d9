"""Domain models for srclink."""

from srclink.core.models.source import FileDetail, RepoRecord, SourceLocation

__all__ = [
    "FileDetail",
    "RepoRecord",
    "SourceLocation",
]
