"""Service layer for srclink."""

from srclink.services.source_links import SourceLinkService, get_source_link_service

__all__ = ["SourceLinkService", "get_source_link_service"]
