"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from srclink.config.settings import Settings, get_settings
from srclink.git.branch import BRANCH_ENV_VARS
from srclink.services.source_links import get_source_link_service

GIT_CONFIG_TEMPLATE = """[core]
\trepositoryformatversion = 0
\tfilemode = true
\tbare = false
{remotes}"""

REMOTE_TEMPLATE = """[remote "{name}"]
\turl = {url}
\tfetch = +refs/heads/*:refs/remotes/{name}/*
"""


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from CI branch variables and cached settings."""
    for name in BRANCH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper().startswith("SRCLINK_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_source_link_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_source_link_service.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., Path]:
    """Create a fake git repository with the given remotes and HEAD."""

    def _make_repo(
        name: str = "repo",
        remotes: list[tuple[str, str]] | None = None,
        head: str | None = "ref: refs/heads/main",
        parent: Path | None = None,
    ) -> Path:
        root = (parent or tmp_path) / name
        git_dir = root / ".git"
        git_dir.mkdir(parents=True)

        if remotes is None:
            remotes = [("origin", "git@github.com:acme/docs.git")]
        config = GIT_CONFIG_TEMPLATE.format(
            remotes="".join(REMOTE_TEMPLATE.format(name=n, url=u) for n, u in remotes)
        )
        (git_dir / "config").write_text(config)

        if head is not None:
            (git_dir / "HEAD").write_text(head + "\n")
        return root

    return _make_repo
