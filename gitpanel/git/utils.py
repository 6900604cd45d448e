"""Git utility functions for GitPanel."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

# Marker that identifies a repository root
GIT_MARKER = ".git"


def find_repo_root(start_path: Path | str | None) -> Optional[Path]:
    """Find the root of a git repository.

    Walks up the directory tree from start_path looking for a .git entry.
    A file may be given, in which case the search starts at its directory.

    Args:
        start_path: Path to start searching from.

    Returns:
        Path to the repository root, or None if not in a git repository.
    """
    if not start_path:
        return None

    path = Path(start_path).expanduser().resolve()
    if path.is_file():
        path = path.parent

    if not path.is_dir():
        return None

    for parent in [path] + list(path.parents):
        if (parent / GIT_MARKER).exists():
            return parent

    return None


def is_repository(root: Path | str | None) -> bool:
    """Check whether ``root`` itself holds a .git entry.

    Unlike :func:`find_repo_root` this does not look at parent directories;
    the panel only works against an explicit root.
    """
    if not root:
        return False
    return (Path(root) / GIT_MARKER).exists()


def build_remote_args(verb: str, remote: Optional[str], branch: Optional[str]) -> list[str]:
    """Build ``push``/``pull`` arguments from the selected remote and branch.

    Both set gives ``<verb> <remote> <branch>``, remote only gives
    ``<verb> <remote>``, otherwise the bare verb lets git use the tracking
    configuration.
    """
    if remote and branch:
        return [verb, remote, branch]
    if remote:
        return [verb, remote]
    return [verb]
