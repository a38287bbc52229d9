"""Source location models."""

from pydantic import BaseModel, ConfigDict, Field


class RepoRecord(BaseModel):
    """Resolved identity of the git repository that owns a subtree."""

    model_config = ConfigDict(frozen=True)

    root_path: str
    remote_url: str = Field(min_length=1)
    branch: str = Field(min_length=1)


class SourceLocation(BaseModel):
    """A provider-agnostic point in source.

    ``repo`` is a URL or an scp-like address (``git@host:owner/repo.git``),
    ``branch`` a branch name or commit id and ``path`` a path relative to
    the repository root. A ``line`` of 0 means no specific line.
    """

    model_config = ConfigDict(frozen=True)

    repo: str
    branch: str
    path: str
    line: int = Field(default=0, ge=0)


class FileDetail(BaseModel):
    """Repository details for a single file."""

    model_config = ConfigDict(frozen=True)

    repo_url: str
    branch: str
    relative_path: str  # always forward slashes

    def to_source_location(self, line: int = 0) -> SourceLocation:
        return SourceLocation(
            repo=self.repo_url,
            branch=self.branch,
            path=self.relative_path,
            line=line,
        )
