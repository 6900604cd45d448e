"""Git integration for GitPanel.

This package runs the git executable and turns its text output into
structured state: porcelain status entries, remote/branch listings and
the reconciled push/pull selection.
"""

from gitpanel.git.executor import (
    CommandExecutor,
    OperationResult,
    run_git_command,
    run_git_detached,
)
from gitpanel.git.metadata import (
    RepositoryMetadata,
    parse_branch_list,
    parse_remote_list,
    reconcile,
    reload_metadata,
)
from gitpanel.git.status import FileStatusEntry, parse_status, unquote_path
from gitpanel.git.utils import build_remote_args, find_repo_root, is_repository
from gitpanel.git.warnings import is_benign_warning

__all__ = [
    # Execution
    "CommandExecutor",
    "OperationResult",
    "run_git_command",
    "run_git_detached",
    # Status
    "FileStatusEntry",
    "parse_status",
    "unquote_path",
    "is_benign_warning",
    # Metadata
    "RepositoryMetadata",
    "parse_branch_list",
    "parse_remote_list",
    "reconcile",
    "reload_metadata",
    # Utility functions
    "build_remote_args",
    "find_repo_root",
    "is_repository",
]
