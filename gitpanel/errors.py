"""Centralized exception hierarchy for GitPanel.

Git actions never raise for tool failures; their outcome lands in the
panel's error slot instead. The exceptions below cover the seams where
a caller has to stop: bad configuration, a repository path that does not
exist, invalid user input and malformed panel commands.
"""

from __future__ import annotations

from typing import Any, Optional


class GitPanelError(Exception):
    """Base exception for all GitPanel errors.

    Attributes:
        message: Human-readable error message.
        code: Optional error code for programmatic handling.
        details: Optional dictionary with additional error context.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(GitPanelError):
    """Raised when there's a configuration problem."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid configuration for '{field}': {reason}",
            code="INVALID_CONFIG",
            details={"field": field, "value": str(value)[:100], "reason": reason},
        )


# =============================================================================
# Git Errors
# =============================================================================

class GitError(GitPanelError):
    """Base class for errors about the repository itself."""

    pass


class NotARepositoryError(GitError):
    """Raised when path is not a git repository."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Not a git repository: {path}",
            code="NOT_A_REPOSITORY",
            details={"path": path},
        )


# =============================================================================
# Input Errors
# =============================================================================

class InputValidationError(GitPanelError):
    """Raised when user input fails validation."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Invalid input for '{field}': {reason}",
            code="INPUT_VALIDATION_ERROR",
            details={"field": field, "reason": reason},
        )


# =============================================================================
# UI Errors
# =============================================================================

class UIError(GitPanelError):
    """Base exception for UI-related errors."""
    pass


class CommandError(UIError):
    """Raised when a panel command fails."""

    def __init__(self, command: str, reason: str):
        super().__init__(
            message=f"Command '{command}' failed: {reason}",
            code="COMMAND_ERROR",
            details={"command": command, "reason": reason},
        )
