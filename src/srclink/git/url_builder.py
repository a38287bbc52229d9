"""Build browsable web links for source locations."""

import re
from collections.abc import Iterable
from urllib.parse import SplitResult, urlsplit

import structlog

from srclink.core.exceptions import ConfigurationError
from srclink.core.models.source import SourceLocation
from srclink.git.providers import DEFAULT_PROVIDERS, Provider

logger = structlog.get_logger(__name__)

_HOST_PORT = re.compile(r"^([^/:]+):\d+/")


class URLBuilder:
    """Turns a SourceLocation into a provider-specific file URL.

    Supports GitHub, Bitbucket and Azure DevOps out of the box:
    - github.com/org/repo -> https://github.com/org/repo/blob/main/doc.md#L10
    - bitbucket.org/org/repo -> https://bitbucket.org/org/repo/src/main/doc.md#lines-10
    - dev.azure.com/org/project/_git/repo -> ...?path=doc.md&version=GBmain&line=10

    Unknown hosts produce None rather than an error.
    """

    def __init__(self, providers: Iterable[Provider] = DEFAULT_PROVIDERS) -> None:
        self._providers: list[Provider] = []
        for provider in providers:
            self.register(provider)

    @property
    def providers(self) -> tuple[Provider, ...]:
        return tuple(self._providers)

    def register(self, provider: Provider, first: bool = False) -> None:
        """Add a provider, at the end of the table or in front of it."""
        if any(p.name == provider.name for p in self._providers):
            raise ConfigurationError(
                f"Provider already registered: {provider.name}",
                details={"provider": provider.name},
            )
        if first:
            self._providers.insert(0, provider)
        else:
            self._providers.append(provider)

    def build(self, location: SourceLocation) -> str | None:
        """Build the web URL for ``location``, or None if unsupported."""
        url = self._parse(self.normalize_repo_url(location.repo))
        if url is None:
            logger.debug("Repository address is not an absolute URL", repo=location.repo)
            return None

        path = location.path.replace("\\", "/")
        host = url.hostname or ""
        for provider in self._providers:
            if provider.matches(host):
                return provider.render(url, location.branch, path, location.line)

        logger.debug("Unsupported hosting provider", host=host)
        return None

    @staticmethod
    def normalize_repo_url(url: str) -> str:
        """Normalize a git remote address to an HTTPS-style URL.

        Handles:
        - git@github.com:org/repo.git -> https://github.com/org/repo
        - git+ssh://git@host:22/org/repo.git -> https://host/org/repo
        - https://github.com/org/repo.git/ -> https://github.com/org/repo
        """
        if url.startswith("git"):
            url = URLBuilder._scp_to_https(url)
        url = url.rstrip("/")
        return url.removesuffix(".git")

    @staticmethod
    def _scp_to_https(url: str) -> str:
        at = url.find("@")
        if at == -1:
            return url
        address = url[at + 1:]
        if "://" in url:
            # only URL-form addresses carry a port; scp paths may start with digits
            address = _HOST_PORT.sub(r"\1/", address, count=1)
        return "https://" + address.replace(":", "/", 1)

    @staticmethod
    def _parse(url: str) -> SplitResult | None:
        try:
            parts = urlsplit(url)
        except ValueError:
            return None
        if not parts.scheme or not parts.hostname:
            return None
        return parts
