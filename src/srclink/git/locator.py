"""Locate the git repository root that owns a directory."""

import os
from pathlib import Path

GIT_DIR = ".git"


def is_repo_root(directory: str | os.PathLike[str]) -> bool:
    """Check if a directory holds a ``.git`` metadata directory.

    Worktrees and submodules keep a ``.git`` *file* that redirects to the
    real metadata elsewhere. Those are not recognised as repository roots.
    """
    return os.path.isdir(os.path.join(directory, GIT_DIR))


def find_repo_root(start: str | os.PathLike[str]) -> Path | None:
    """Walk upward from ``start`` (inclusive) to the nearest repository root.

    Returns None when the filesystem root is reached without finding one.
    """
    current = os.path.abspath(start)
    while True:
        if is_repo_root(current):
            return Path(current)
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent
