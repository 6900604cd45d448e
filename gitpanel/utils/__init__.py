"""Utility functions for GitPanel."""

from .logging import (
    LogCapture,
    configure_logging,
    disable_logging,
    level_from_name,
    setup_logging,
)

__all__ = [
    "LogCapture",
    "configure_logging",
    "disable_logging",
    "level_from_name",
    "setup_logging",
]
