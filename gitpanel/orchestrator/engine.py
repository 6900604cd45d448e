"""Git actions for the panel.

Each action builds one git command from the panel state, runs it through
the executor, applies the shared success rule and writes the outcome back
into the state. Actions never raise for git failures: the failure text
goes into ``state.last_error``, which every action overwrites, and the
panel stays usable.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from gitpanel.errors import InputValidationError
from gitpanel.git.executor import CommandExecutor, OperationResult
from gitpanel.git.metadata import DEFAULT_REMOTE, reload_metadata
from gitpanel.git.status import STATUS_ARGS, parse_status
from gitpanel.git.utils import build_remote_args, find_repo_root, is_repository
from gitpanel.orchestrator.state import Action, ActionOutcome, PanelState

if TYPE_CHECKING:
    from gitpanel.config import Settings

logger = logging.getLogger(__name__)

MISSING_REPOSITORY = "Repo root is invalid or .git folder missing."
EMPTY_COMMIT_MESSAGE = "Commit message is empty."
NO_LOCAL_BRANCHES = "No local branches found."
NO_PATH_GIVEN = "No file path given."


def validate_commit_message(message: Optional[str]) -> str:
    """Return the message if it can be committed.

    Raises:
        InputValidationError: If the message is empty or only whitespace.
    """
    if not message or not message.strip():
        raise InputValidationError("commit_message", EMPTY_COMMIT_MESSAGE)
    return message


class Orchestrator:
    """Performs git actions against a :class:`PanelState`."""

    def __init__(self, executor: CommandExecutor, default_remote: str = DEFAULT_REMOTE):
        """Initialize the orchestrator.

        Args:
            executor: Runs git; tests pass a scripted stand-in.
            default_remote: Remote offered when the repository has none.
        """
        self.executor = executor
        self.default_remote = default_remote

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Orchestrator":
        """Create an orchestrator configured from settings."""
        return cls(
            executor=CommandExecutor.from_config(settings.git),
            default_remote=settings.git.default_remote,
        )

    # ------------------------------------------------------------------
    # Repository selection
    # ------------------------------------------------------------------

    def new_state(self, repo_root: Optional[Path] = None, auto_detect: bool = True) -> PanelState:
        """Create an empty state whose push target is the default remote."""
        state = PanelState(repo_root=repo_root, auto_detect=auto_detect)
        state.metadata.push_remote = self.default_remote
        return state

    def activate(self, state: PanelState, start_path: Optional[Path] = None) -> PanelState:
        """Detect the repository (if enabled) and load its metadata."""
        if state.auto_detect or not state.repo_root:
            state.repo_root = find_repo_root(start_path or Path.cwd())
            logger.debug(f"Detected repository root: {state.repo_root}")

        if state.repo_root:
            self.reload_metadata(state)
        return state

    def set_repo_root(self, state: PanelState, root: Path | str) -> PanelState:
        """Point the panel at a user-chosen root and stop auto-detection."""
        state.repo_root = Path(root).expanduser()
        state.auto_detect = False
        state.files = []
        self.reload_metadata(state)
        return state

    def redetect(self, state: PanelState, start_path: Optional[Path] = None) -> PanelState:
        """Re-run auto-detection from ``start_path`` (default: cwd)."""
        state.auto_detect = True
        state.files = []
        return self.activate(state, start_path)

    def reload_metadata(self, state: PanelState) -> ActionOutcome:
        """Reload remotes and branches and reconcile the selection."""
        state.metadata = reload_metadata(
            state.repo_root,
            self.executor,
            previous=state.metadata,
            default_remote=self.default_remote,
        )
        return ActionOutcome(action=Action.RELOAD, succeeded=is_repository(state.repo_root))

    def select_remote(self, state: PanelState, index: int) -> None:
        state.metadata.select_remote(index)

    def select_branch(self, state: PanelState, index: int) -> None:
        state.metadata.select_branch(index)

    def select_branch_by_name(self, state: PanelState, name: str) -> bool:
        """Select a listed local branch by name; False if it is not listed."""
        if name not in state.metadata.local_branches:
            return False
        state.metadata.select_branch(state.metadata.local_branches.index(name))
        return True

    def set_push_remote(self, state: PanelState, name: str) -> None:
        """Set a free-text push remote, keeping the list selection in sync."""
        state.metadata.push_remote = name.strip()
        if state.metadata.push_remote in state.metadata.remotes:
            state.metadata.selected_remote_index = state.metadata.remotes.index(state.metadata.push_remote)

    def set_push_branch(self, state: PanelState, name: str) -> None:
        """Set a free-text push branch, keeping the list selection in sync."""
        state.metadata.push_branch = name.strip()
        if state.metadata.push_branch in state.metadata.local_branches:
            state.metadata.selected_branch_index = state.metadata.local_branches.index(
                state.metadata.push_branch
            )

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def refresh_status(self, state: PanelState) -> ActionOutcome:
        """Reload the changed-file list."""
        missing = self._require_repository(state, Action.REFRESH)
        if missing:
            return missing

        result = self._run(state, STATUS_ARGS)
        succeeded = self._record(state, Action.REFRESH, result)
        state.files = parse_status(result.stdout)
        return ActionOutcome(action=Action.REFRESH, succeeded=succeeded, result=result)

    def stage(self, state: PanelState, path: str) -> ActionOutcome:
        """Stage one file."""
        return self._path_action(state, Action.STAGE, ["add", "--"], path)

    def unstage(self, state: PanelState, path: str) -> ActionOutcome:
        """Remove one file from the index, keeping working-tree changes."""
        return self._path_action(state, Action.UNSTAGE, ["restore", "--staged", "--"], path)

    def stage_all(self, state: PanelState) -> ActionOutcome:
        """Stage every change in the working tree."""
        missing = self._require_repository(state, Action.STAGE_ALL)
        if missing:
            return missing

        result = self._run(state, ["add", "-A"])
        succeeded = self._record(state, Action.STAGE_ALL, result)
        self._refresh_after(state)
        return ActionOutcome(action=Action.STAGE_ALL, succeeded=succeeded, result=result)

    def diff(self, state: PanelState, path: str) -> ActionOutcome:
        """Produce the working-tree diff of one file for display."""
        missing = self._require_repository(state, Action.DIFF)
        if missing:
            return missing

        result = self._run(state, ["diff", "--", path])
        succeeded = self._record(state, Action.DIFF, result)
        return ActionOutcome(
            action=Action.DIFF,
            succeeded=succeeded,
            result=result,
            output=result.stdout,
        )

    # ------------------------------------------------------------------
    # Commit / push / pull / checkout
    # ------------------------------------------------------------------

    def commit(self, state: PanelState) -> ActionOutcome:
        """Commit the index with ``state.commit_message``.

        A blank message is refused before git runs. On success the message
        is cleared and status and metadata are reloaded.
        """
        try:
            message = validate_commit_message(state.commit_message)
        except InputValidationError:
            logger.info("Commit refused: message is empty")
            return ActionOutcome.refused(Action.COMMIT, EMPTY_COMMIT_MESSAGE)

        missing = self._require_repository(state, Action.COMMIT)
        if missing:
            return missing

        result = self._run(state, ["commit", "-m", message])
        if not self._record(state, Action.COMMIT, result):
            return ActionOutcome(action=Action.COMMIT, succeeded=False, result=result)

        self._log_output(Action.COMMIT, result)
        state.commit_message = ""
        self._refresh_after(state)
        self.reload_metadata(state)
        return ActionOutcome(action=Action.COMMIT, succeeded=True, result=result)

    def commit_and_push(self, state: PanelState) -> ActionOutcome:
        """Commit, then push only if the commit succeeded."""
        outcome = self.commit(state)
        if not outcome.succeeded:
            return outcome
        return self.push(state)

    def push(self, state: PanelState) -> ActionOutcome:
        """Push to the selected remote and branch."""
        missing = self._require_repository(state, Action.PUSH)
        if missing:
            return missing

        metadata = state.metadata
        args = build_remote_args("push", metadata.push_remote, metadata.push_branch)
        result = self._run(state, args)
        succeeded = self._record(state, Action.PUSH, result)
        self._log_output(Action.PUSH, result)
        return ActionOutcome(action=Action.PUSH, succeeded=succeeded, result=result)

    def pull(self, state: PanelState) -> ActionOutcome:
        """Pull from the selected remote and branch."""
        missing = self._require_repository(state, Action.PULL)
        if missing:
            return missing

        metadata = state.metadata
        args = build_remote_args("pull", metadata.push_remote, metadata.push_branch)
        result = self._run(state, args)
        succeeded = self._record(state, Action.PULL, result)
        self._log_output(Action.PULL, result)

        self._refresh_after(state)
        self.reload_metadata(state)
        return ActionOutcome(action=Action.PULL, succeeded=succeeded, result=result)

    def checkout(self, state: PanelState) -> ActionOutcome:
        """Check out the selected local branch.

        Status and metadata are reloaded whether or not git succeeded, so the
        displayed branch always matches the repository.
        """
        missing = self._require_repository(state, Action.CHECKOUT)
        if missing:
            return missing

        if not state.metadata.local_branches:
            return ActionOutcome.refused(Action.CHECKOUT, NO_LOCAL_BRANCHES)

        branch = state.metadata.selected_branch
        result = self._run(state, ["checkout", branch])
        succeeded = self._record(state, Action.CHECKOUT, result)
        self._log_output(Action.CHECKOUT, result)

        self._refresh_after(state)
        self.reload_metadata(state)
        return ActionOutcome(action=Action.CHECKOUT, succeeded=succeeded, result=result)

    def open_gui(self, state: PanelState) -> ActionOutcome:
        """Launch ``git gui`` without waiting for it."""
        missing = self._require_repository(state, Action.OPEN_GUI)
        if missing:
            return missing

        launched = self.executor.execute_detached(["gui"], state.repo_root)
        return ActionOutcome(action=Action.OPEN_GUI, succeeded=launched)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run(self, state: PanelState, args: list[str]) -> OperationResult:
        return self.executor.execute(args, state.repo_root)

    def _require_repository(self, state: PanelState, action: Action) -> Optional[ActionOutcome]:
        """Refuse status-dependent actions without a repository."""
        if is_repository(state.repo_root):
            return None

        logger.error(f"Git {action.value} error: {MISSING_REPOSITORY}")
        state.last_error = MISSING_REPOSITORY
        state.files = []
        return ActionOutcome(action=action, succeeded=False)

    def _path_action(
        self,
        state: PanelState,
        action: Action,
        prefix: list[str],
        path: str,
    ) -> ActionOutcome:
        missing = self._require_repository(state, action)
        if missing:
            return missing

        if not path or not path.strip():
            return ActionOutcome.refused(action, NO_PATH_GIVEN)

        result = self._run(state, prefix + [path])
        succeeded = self._record(state, action, result)
        self._refresh_after(state)
        return ActionOutcome(action=action, succeeded=succeeded, result=result)

    def _record(self, state: PanelState, action: Action, result: OperationResult) -> bool:
        """Apply the success rule and update the error slot."""
        if not result.ok:
            logger.error(f"Git {action.value} error: {result.error_message}")
            state.last_error = result.error_message
            return False

        state.last_error = None
        stderr = result.stderr.strip()
        if stderr:
            # git reports progress and line-ending notices on stderr
            logger.info(f"Git {action.value} info (stderr):\n{stderr}")
        return True

    def _refresh_after(self, state: PanelState) -> None:
        """Reload the file list after an action.

        Keeps the triggering action's error; only a failing refresh may fill
        an empty error slot.
        """
        result = self._run(state, STATUS_ARGS)
        state.files = parse_status(result.stdout)
        if not result.ok:
            logger.error(f"Git {Action.REFRESH.value} error: {result.error_message}")
            if state.last_error is None:
                state.last_error = result.error_message

    @staticmethod
    def _log_output(action: Action, result: OperationResult) -> None:
        output = result.stdout.strip()
        if output:
            logger.info(f"Git {action.value} output:\n{output}")
