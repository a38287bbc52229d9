"""Exceptions for srclink."""

from typing import Any


class SrcLinkError(Exception):
    """Base exception for srclink."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SrcLinkError):
    """Raised when srclink is configured inconsistently."""
