"""Logging configuration for GitPanel.

Every module logs through ``logging.getLogger(__name__)``; this module only
attaches handlers to the package logger.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from gitpanel.config.settings import LoggingConfig

ROOT_LOGGER = "gitpanel"

CONSOLE_FORMAT = "%(message)s"
CONSOLE_DATE_FORMAT = "[%X]"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_name(name: str) -> int:
    """Translate a level name such as ``"warning"`` into a logging level."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _console_handler(level: int, verbose: bool) -> logging.Handler:
    # stderr, so stdout carries only git output in one-shot commands.
    # Markup is off because messages embed raw git stderr.
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=verbose,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Attach a Rich console handler, and optionally a file handler.

    Calling this again replaces the handlers from the previous call.

    Args:
        level: Console level; ``verbose`` forces DEBUG
        log_file: File that receives every record down to DEBUG
        verbose: Show debug output with source paths

    Returns:
        The ``gitpanel`` logger
    """
    if verbose:
        level = logging.DEBUG

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    logger.addHandler(_console_handler(level, verbose))
    if log_file:
        logger.addHandler(_file_handler(log_file))

    # The logger must pass DEBUG records through when a file wants them.
    logger.setLevel(logging.DEBUG if log_file else level)
    return logger


def configure_logging(config: "LoggingConfig", verbose: bool = False) -> logging.Logger:
    """Set up logging from the ``logging`` settings section."""
    return setup_logging(
        level=level_from_name(config.level),
        log_file=config.resolved_file,
        verbose=verbose,
    )


def disable_logging() -> None:
    """Drop all handlers (useful for testing)."""
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())


class LogCapture:
    """Context manager to capture log messages (useful for testing)."""

    def __init__(self, logger_name: str = ROOT_LOGGER, level: int = logging.DEBUG):
        self.logger_name = logger_name
        self.level = level
        self.records: list[logging.LogRecord] = []
        self._handler: Optional[logging.Handler] = None
        self._previous_level: Optional[int] = None

    def __enter__(self) -> "LogCapture":
        logger = logging.getLogger(self.logger_name)
        self._handler = CaptureHandler(self.records)
        self._previous_level = logger.level
        logger.setLevel(self.level)
        logger.addHandler(self._handler)
        return self

    def __exit__(self, *args) -> None:
        logger = logging.getLogger(self.logger_name)
        if self._handler:
            logger.removeHandler(self._handler)
        if self._previous_level is not None:
            logger.setLevel(self._previous_level)

    @property
    def messages(self) -> list[str]:
        return [record.getMessage() for record in self.records]

    def has_message(self, substring: str) -> bool:
        """Check if any captured message contains the substring."""
        return any(substring in msg for msg in self.messages)

    def at_level(self, level: int) -> list[str]:
        """Captured messages logged at exactly ``level``."""
        return [r.getMessage() for r in self.records if r.levelno == level]


class CaptureHandler(logging.Handler):
    """Appends every record to a shared list."""

    def __init__(self, records: list[logging.LogRecord]):
        super().__init__()
        self.records = records

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)
