"""Determine the branch or commit a repository is on."""

import os
from collections.abc import Mapping

from srclink.git.locator import GIT_DIR

OVERRIDE_ENV_VAR = "SRCLINK_SOURCE_BRANCH_NAME"

# Checked in order, the first non-empty value wins.
BRANCH_ENV_VARS: tuple[str, ...] = (
    OVERRIDE_ENV_VAR,
    "GITHUB_REF_NAME",  # GitHub Actions
    "APPVEYOR_REPO_BRANCH",  # AppVeyor
    "Git_Branch",  # TeamCity
    "CI_BUILD_REF_NAME",  # GitLab CI
    "GIT_LOCAL_BRANCH",  # Jenkins
    "GIT_BRANCH",  # Jenkins
    "BUILD_SOURCEBRANCHNAME",  # Azure Pipelines
)

_REF_PREFIX = "ref: "
_REF_MARKERS = ("refs/heads/", "refs/remotes/", "refs/tags/")


def resolve_environment_branch(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the branch announced by the CI environment, if any."""
    if environ is None:
        environ = os.environ
    for name in BRANCH_ENV_VARS:
        value = environ.get(name)
        if value:
            return value
    return None


def shorten_ref(ref: str) -> str:
    """Turn ``refs/heads/main`` into ``main``.

    The markers are removed one after the other as plain substrings, heads
    first, then remotes, then tags.
    """
    for marker in _REF_MARKERS:
        ref = ref.replace(marker, "")
    return ref


def read_head_branch(root: str | os.PathLike[str]) -> str | None:
    """Read the current branch from ``.git/HEAD``.

    A detached HEAD yields the raw commit id.
    """
    head_path = os.path.join(root, GIT_DIR, "HEAD")
    if not os.path.isfile(head_path):
        return None
    with open(head_path, encoding="utf-8", errors="replace") as f:
        head = f.read().strip()

    if head.startswith(_REF_PREFIX):
        return shorten_ref(head[len(_REF_PREFIX):])
    return head or None


def resolve_branch(
    root: str | os.PathLike[str], environment_branch: str | None = None
) -> str | None:
    """Branch for the repository at ``root``, preferring the CI environment."""
    return environment_branch or read_head_branch(root)


def is_commit_id(branch: str) -> bool:
    """A commit id is exactly 40 alphanumeric characters."""
    return len(branch) == 40 and branch.isalnum()
