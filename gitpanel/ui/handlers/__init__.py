"""Input handlers for the panel."""

from gitpanel.ui.handlers.commands import Command, CommandHandler, CommandResult

__all__ = [
    "Command",
    "CommandHandler",
    "CommandResult",
]
