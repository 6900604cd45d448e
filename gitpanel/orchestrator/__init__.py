"""Orchestration of git actions for GitPanel.

The orchestrator turns user actions into git commands, interprets their
results and keeps the panel state (file list, branch selection, last
error) consistent afterwards.
"""

from gitpanel.orchestrator.engine import (
    EMPTY_COMMIT_MESSAGE,
    MISSING_REPOSITORY,
    NO_LOCAL_BRANCHES,
    Orchestrator,
    validate_commit_message,
)
from gitpanel.orchestrator.state import Action, ActionOutcome, PanelState

__all__ = [
    "Action",
    "ActionOutcome",
    "PanelState",
    "Orchestrator",
    "validate_commit_message",
    "EMPTY_COMMIT_MESSAGE",
    "MISSING_REPOSITORY",
    "NO_LOCAL_BRANCHES",
]
