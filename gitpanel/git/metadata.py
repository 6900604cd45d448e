"""Remote and branch information for the selected repository.

The panel keeps a chosen remote and branch (the push/pull target) next to
the lists git reports. Whenever the lists are reloaded the choice is
reconciled against them with :func:`reconcile`, so the selection indices
always point into the lists the user sees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from gitpanel.git.utils import is_repository

if TYPE_CHECKING:
    from gitpanel.git.executor import CommandExecutor

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"

REMOTE_LIST_ARGS = ["remote"]
BRANCH_LIST_ARGS = ["branch", "--format=%(refname:short)"]
CURRENT_BRANCH_ARGS = ["rev-parse", "--abbrev-ref", "HEAD"]
# Still answers on a branch without commits, where rev-parse fails
SYMBOLIC_BRANCH_ARGS = ["symbolic-ref", "--quiet", "--short", "HEAD"]


@dataclass
class RepositoryMetadata:
    """Remotes, branches and the current selection for one repository."""

    remotes: list[str] = field(default_factory=list)
    local_branches: list[str] = field(default_factory=list)
    current_branch: str = ""
    selected_remote_index: int = 0
    selected_branch_index: int = 0
    push_remote: str = DEFAULT_REMOTE
    push_branch: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.remotes and not self.local_branches and not self.current_branch

    @property
    def selected_branch(self) -> str:
        """Branch at the clamped selection index, or "" without branches."""
        if not self.local_branches:
            return ""
        return self.local_branches[_clamp(self.selected_branch_index, len(self.local_branches))]

    def select_remote(self, index: int) -> None:
        """Select a remote from the list and make it the push target."""
        if not self.remotes:
            return
        self.selected_remote_index = _clamp(index, len(self.remotes))
        self.push_remote = self.remotes[self.selected_remote_index]

    def select_branch(self, index: int) -> None:
        """Select a local branch and make it the push target."""
        if not self.local_branches:
            return
        self.selected_branch_index = _clamp(index, len(self.local_branches))
        self.push_branch = self.local_branches[self.selected_branch_index]

    def push_target_label(self) -> str:
        """Describe where a push will go, e.g. ``origin main``."""
        remote = self.push_remote or "(default remote)"
        branch = self.push_branch or "(tracking branch)"
        return f"{remote} {branch}"


def _clamp(index: int, count: int) -> int:
    return max(0, min(index, count - 1))


def _index_of(items: list[str], value: str) -> int:
    try:
        return items.index(value)
    except ValueError:
        return -1


def parse_remote_list(raw: Optional[str]) -> list[str]:
    """Parse ``git remote`` output, one remote name per line."""
    if not raw:
        return []
    return [line.strip() for line in raw.splitlines() if line.strip()]


def parse_branch_list(raw: Optional[str]) -> list[str]:
    """Parse branch short names, dropping the ``*`` current-branch marker."""
    if not raw:
        return []

    branches = []
    for line in raw.splitlines():
        name = line.strip().strip("*").strip()
        if name:
            branches.append(name)
    return branches


def reconcile(
    remotes: list[str],
    local_branches: list[str],
    current_branch: str,
    push_remote: str,
    push_branch: str,
    default_remote: str = DEFAULT_REMOTE,
) -> RepositoryMetadata:
    """Combine fresh git listings with the previous selection.

    - No remotes: offer ``default_remote`` so there is always a target.
    - No branches but a known current branch: list that branch.
    - The remote selection follows ``push_remote`` when listed, else the
      first remote, and ``push_remote`` is set to the selected entry.
    - The branch selection follows ``push_branch``, then ``current_branch``,
      then the first branch. An empty ``push_branch`` adopts the selected
      branch; with no branches at all it is cleared.

    Calling this again with its own output changes nothing.
    """
    remotes = list(remotes) or [default_remote]
    local_branches = list(local_branches)
    if not local_branches and current_branch:
        local_branches = [current_branch]

    remote_index = _clamp(_index_of(remotes, push_remote), len(remotes))
    push_remote = remotes[remote_index]

    branch_index = -1
    if push_branch:
        branch_index = _index_of(local_branches, push_branch)
    if branch_index < 0 and current_branch:
        branch_index = _index_of(local_branches, current_branch)
    if branch_index < 0:
        branch_index = 0

    if local_branches:
        branch_index = _clamp(branch_index, len(local_branches))
        if not push_branch:
            push_branch = local_branches[branch_index]
    else:
        push_branch = ""

    return RepositoryMetadata(
        remotes=remotes,
        local_branches=local_branches,
        current_branch=current_branch,
        selected_remote_index=remote_index,
        selected_branch_index=branch_index,
        push_remote=push_remote,
        push_branch=push_branch,
    )


def list_remotes(repo_root: Path, executor: "CommandExecutor") -> list[str]:
    """Names of the configured remotes, in git's order."""
    result = executor.execute(REMOTE_LIST_ARGS, repo_root)
    if not result.ok:
        logger.warning(f"Could not list remotes: {result.error_message}")
    return parse_remote_list(result.stdout)


def list_local_branches(repo_root: Path, executor: "CommandExecutor") -> list[str]:
    """Short names of local branches."""
    result = executor.execute(BRANCH_LIST_ARGS, repo_root)
    if not result.ok:
        logger.warning(f"Could not list branches: {result.error_message}")
    return parse_branch_list(result.stdout)


def get_current_branch(repo_root: Path, executor: "CommandExecutor") -> str:
    """Branch HEAD points to, or "" when detached or unknown."""
    result = executor.execute(CURRENT_BRANCH_ARGS, repo_root)
    branch = result.stdout.strip() if result.exit_code == 0 else ""

    if not branch:
        fallback = executor.execute(SYMBOLIC_BRANCH_ARGS, repo_root)
        branch = fallback.stdout.strip() if fallback.exit_code == 0 else ""

    # rev-parse answers "HEAD" when detached
    if branch == "HEAD":
        return ""
    return branch


def reload_metadata(
    repo_root: Path | str | None,
    executor: "CommandExecutor",
    previous: Optional[RepositoryMetadata] = None,
    default_remote: str = DEFAULT_REMOTE,
) -> RepositoryMetadata:
    """Query git for remotes and branches and reconcile the selection.

    A missing root or one without .git yields empty metadata; that is "no
    data", not an error. The previous selection carries the user's chosen
    remote and branch across the reload.
    """
    if not is_repository(repo_root):
        logger.debug(f"No repository at {repo_root!r}; clearing metadata")
        metadata = RepositoryMetadata(push_branch="")
        if previous is not None:
            metadata.push_remote = previous.push_remote
        return metadata

    root = Path(repo_root)
    remotes = list_remotes(root, executor)
    branches = list_local_branches(root, executor)
    current = get_current_branch(root, executor)

    push_remote = previous.push_remote if previous else default_remote
    push_branch = previous.push_branch if previous else ""

    metadata = reconcile(
        remotes,
        branches,
        current,
        push_remote=push_remote,
        push_branch=push_branch,
        default_remote=default_remote,
    )
    logger.debug(
        f"Loaded metadata: {len(metadata.remotes)} remote(s), "
        f"{len(metadata.local_branches)} branch(es), current={metadata.current_branch!r}"
    )
    return metadata
