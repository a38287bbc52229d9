"""Application settings using Pydantic Settings."""

from functools import lru_cache

from pydantic import PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from srclink.git.branch import resolve_environment_branch


class Settings(BaseSettings):
    """Settings loaded from ``SRCLINK_*`` environment variables.

    The CI branch is looked up once, when the settings are created, and
    stays fixed afterwards.
    """

    model_config = SettingsConfigDict(
        env_prefix="SRCLINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    # General
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    # Explicit branch override, takes precedence over CI variables
    source_branch_name: str | None = None

    # Turns every lookup into "no detail" without touching the filesystem
    disable_git_features: bool = False

    # Worker threads used when resolving many files at once
    max_parallelism: int = 4

    _environment_branch: str | None = PrivateAttr(default=None)

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._environment_branch = self.source_branch_name or resolve_environment_branch()

    @property
    def environment_branch(self) -> str | None:
        return self._environment_branch


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
