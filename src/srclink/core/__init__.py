"""Core domain models and exceptions for srclink."""

from srclink.core.exceptions import ConfigurationError, SrcLinkError
from srclink.core.models import FileDetail, RepoRecord, SourceLocation

__all__ = [
    # Models
    "RepoRecord",
    "SourceLocation",
    "FileDetail",
    # Exceptions
    "SrcLinkError",
    "ConfigurationError",
]
