"""Running the git executable.

Every invocation is synchronous: the caller blocks until git exits and
gets back an :class:`OperationResult` with both output streams and the
exit code. Launch failures are folded into the result instead of being
raised, so a broken git installation shows up in the panel like any other
failed command.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from gitpanel.config.settings import GitConfig, default_git_executable
from gitpanel.git.warnings import is_benign_warning

logger = logging.getLogger(__name__)

# Exit code reported when git could not be started or did not finish
LAUNCH_FAILED = -1


def git_verb(args) -> str:
    """The git subcommand in ``args``, skipping leading ``-c key=value`` pairs."""
    i = 0
    while i < len(args) and args[i] == "-c":
        i += 2
    return args[i] if i < len(args) else "command"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a single git invocation."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    args: tuple[str, ...] = field(default=())

    @property
    def ok(self) -> bool:
        """Whether the invocation counts as a success.

        A zero exit code succeeds. So does a failing exit code whose stderr
        is nothing but a line-ending normalization notice.
        """
        return self.exit_code == 0 or is_benign_warning(self.stderr)

    @property
    def has_benign_stderr(self) -> bool:
        """True when stderr only carries a line-ending notice."""
        return is_benign_warning(self.stderr)

    @property
    def error_message(self) -> str:
        """Message suitable for the panel's error slot."""
        message = self.stderr.strip()
        if message:
            return message
        return f"git {git_verb(self.args)} failed with exit code {self.exit_code}"

    @classmethod
    def launch_failure(cls, args: list[str], reason: str) -> "OperationResult":
        """Result for a process that could not be started."""
        return cls(stdout="", stderr=reason, exit_code=LAUNCH_FAILED, args=tuple(args))


def run_git_command(
    args: list[str],
    cwd: Path | str | None = None,
    executable: Optional[str] = None,
    timeout: Optional[float] = None,
) -> OperationResult:
    """Run a git command and capture its result.

    Args:
        args: Git command arguments (without the executable).
        cwd: Working directory for the command.
        executable: Git binary to run; defaults to the platform name.
        timeout: Seconds to wait before abandoning the command. ``None``
            waits for git to exit on its own.

    Returns:
        OperationResult with stdout, stderr and exit code. Never raises for
        launch failures; those are reported with exit code -1.
    """
    cmd = [executable or default_git_executable()] + list(args)

    logger.debug(f"Running git command: {' '.join(cmd)} (cwd={cwd})")

    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        message = f"Git command timed out after {timeout}s: {' '.join(cmd)}"
        logger.error(message)
        return OperationResult.launch_failure(args, message)
    except (OSError, ValueError) as e:
        message = f"Failed to run {cmd[0]}: {e}"
        logger.error(message)
        return OperationResult.launch_failure(args, message)

    result = OperationResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        exit_code=completed.returncode,
        args=tuple(args),
    )
    logger.debug(f"git {git_verb(args)} exited with {result.exit_code}")
    return result


def run_git_detached(
    args: list[str],
    cwd: Path | str | None = None,
    executable: Optional[str] = None,
) -> bool:
    """Start a git command without waiting for it (e.g. ``git gui``).

    Returns:
        True if the process was started. Failures are logged, not raised.
    """
    cmd = [executable or default_git_executable()] + list(args)

    logger.debug(f"Launching detached git command: {' '.join(cmd)} (cwd={cwd})")

    try:
        subprocess.Popen(
            cmd,
            cwd=str(cwd) if cwd else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except (OSError, ValueError) as e:
        logger.error(f"Failed to run git command: {e}")
        return False
    return True


class CommandExecutor:
    """Runs git commands with a fixed executable and timeout.

    The orchestrator only talks to git through this class, which keeps it
    testable with a scripted stand-in.
    """

    def __init__(self, executable: Optional[str] = None, timeout: Optional[float] = None):
        self.executable = executable or default_git_executable()
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: GitConfig) -> "CommandExecutor":
        """Create an executor from the ``git`` settings section."""
        return cls(executable=config.resolved_executable, timeout=config.timeout)

    def execute(self, args: list[str], cwd: Path | str | None) -> OperationResult:
        """Run git and wait for it to finish."""
        return run_git_command(args, cwd=cwd, executable=self.executable, timeout=self.timeout)

    def execute_detached(self, args: list[str], cwd: Path | str | None) -> bool:
        """Start git without waiting for it."""
        return run_git_detached(args, cwd=cwd, executable=self.executable)
