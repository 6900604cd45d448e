"""Panel session state and action outcomes."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from gitpanel.git.executor import OperationResult
from gitpanel.git.metadata import RepositoryMetadata
from gitpanel.git.status import FileStatusEntry


class Action(Enum):
    """Actions the orchestrator can perform."""

    REFRESH = "refresh"
    STAGE = "stage"
    UNSTAGE = "unstage"
    STAGE_ALL = "stage-all"
    DIFF = "diff"
    COMMIT = "commit"
    PUSH = "push"
    PULL = "pull"
    CHECKOUT = "checkout"
    RELOAD = "reload"
    OPEN_GUI = "gui"


@dataclass
class PanelState:
    """Everything one open panel knows about its repository.

    The orchestrator reads the selection and commit message from here and
    writes the file list, metadata and last error back.
    """

    repo_root: Optional[Path] = None
    auto_detect: bool = True
    files: list[FileStatusEntry] = field(default_factory=list)
    metadata: RepositoryMetadata = field(default_factory=RepositoryMetadata)
    commit_message: str = ""
    last_error: Optional[str] = None

    @property
    def current_branch(self) -> str:
        return self.metadata.current_branch

    @property
    def staged_files(self) -> list[FileStatusEntry]:
        return [entry for entry in self.files if entry.is_staged]

    def branch_label(self) -> str:
        """Header text for the current branch."""
        if not self.metadata.current_branch:
            return "Branch: (unknown)"
        return f"Branch: {self.metadata.current_branch}"

    def push_target_label(self) -> str:
        return f"Push target: {self.metadata.push_target_label()}"


@dataclass
class ActionOutcome:
    """Result of one orchestrator action.

    ``notice`` is set when the action was refused before running git (for
    example an empty commit message); ``output`` carries text the caller
    should display, such as a diff.
    """

    action: Action
    succeeded: bool
    result: Optional[OperationResult] = None
    notice: Optional[str] = None
    output: Optional[str] = None

    @classmethod
    def refused(cls, action: Action, notice: str) -> "ActionOutcome":
        """An action blocked by local validation; no command was run."""
        return cls(action=action, succeeded=False, notice=notice)

    @property
    def ran_command(self) -> bool:
        return self.result is not None
