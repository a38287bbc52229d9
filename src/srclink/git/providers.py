"""Hosting providers known to the URL builder.

Each provider pairs a host predicate with a function rendering the
browsable URL of a file. Providers are tried in order; the first whose
predicate accepts the host wins.
"""

from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import SplitResult

from srclink.git.branch import is_commit_id


@dataclass(frozen=True)
class Provider:
    """A hosting provider entry in the URL builder table."""

    name: str
    matches: Callable[[str], bool]
    render: Callable[[SplitResult, str, str, int], str]


def _github(url: SplitResult, branch: str, path: str, line: int) -> str:
    link = f"https://github.com{url.path}/blob/{branch}/{path}"
    if line > 0:
        link += f"#L{line}"
    return link


def _bitbucket(url: SplitResult, branch: str, path: str, line: int) -> str:
    link = f"https://bitbucket.org{url.path}/src/{branch}/{path}"
    if line > 0:
        link += f"#lines-{line}"
    return link


def _azure_devops(url: SplitResult, branch: str, path: str, line: int) -> str:
    version = "GC" if is_commit_id(branch) else "GB"
    link = f"https://{url.hostname}{url.path}?path={path}&version={version}{branch}"
    if line > 0:
        link += f"&line={line}"
    return link


GITHUB = Provider(
    name="github",
    matches=lambda host: host == "github.com",
    render=_github,
)

BITBUCKET = Provider(
    name="bitbucket",
    matches=lambda host: host == "bitbucket.org",
    render=_bitbucket,
)

AZURE_DEVOPS = Provider(
    name="azure-devops",
    matches=lambda host: host.endswith(".visualstudio.com") or host == "dev.azure.com",
    render=_azure_devops,
)

DEFAULT_PROVIDERS: tuple[Provider, ...] = (GITHUB, BITBUCKET, AZURE_DEVOPS)
