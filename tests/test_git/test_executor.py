"""Tests for running git."""

import subprocess
from unittest.mock import MagicMock, patch

from gitpanel.config.settings import GitConfig
from gitpanel.git.executor import (
    LAUNCH_FAILED,
    CommandExecutor,
    OperationResult,
    git_verb,
    run_git_command,
    run_git_detached,
)
from gitpanel.utils.logging import LogCapture


class TestOperationResult:
    """Tests for OperationResult."""

    def test_zero_exit_is_ok(self):
        assert OperationResult(exit_code=0).ok is True

    def test_nonzero_exit_fails(self):
        result = OperationResult(stderr="fatal: bad revision", exit_code=128)
        assert result.ok is False

    def test_benign_stderr_overrides_exit_code(self):
        result = OperationResult(
            stderr="warning: CRLF will be replaced by LF in a.txt",
            exit_code=1,
        )
        assert result.ok is True
        assert result.has_benign_stderr is True

    def test_error_message_uses_stderr(self):
        result = OperationResult(stderr="  error: pathspec 'x' did not match\n", exit_code=1)
        assert result.error_message == "error: pathspec 'x' did not match"

    def test_error_message_without_stderr(self):
        result = OperationResult(exit_code=1, args=("push", "origin"))
        assert result.error_message == "git push failed with exit code 1"

    def test_error_message_skips_config_overrides(self):
        result = OperationResult(exit_code=128, args=("-c", "core.quotepath=false", "status"))
        assert result.error_message == "git status failed with exit code 128"

    def test_launch_failure(self):
        result = OperationResult.launch_failure(["status"], "git not found")
        assert result.exit_code == LAUNCH_FAILED
        assert result.stdout == ""
        assert result.stderr == "git not found"
        assert result.ok is False


def test_git_verb():
    assert git_verb(["commit", "-m", "x"]) == "commit"
    assert git_verb(["-c", "a=b", "-c", "c=d", "diff"]) == "diff"
    assert git_verb([]) == "command"


class TestRunGitCommand:
    """Tests for run_git_command function."""

    @patch("gitpanel.git.executor.subprocess.run")
    def test_success(self, mock_run, tmp_path):
        """Test successful git command execution."""
        mock_run.return_value = MagicMock(stdout="output", stderr="", returncode=0)

        result = run_git_command(["status"], cwd=tmp_path, executable="git")

        assert result.stdout == "output"
        assert result.exit_code == 0
        assert result.args == ("status",)
        call_args = mock_run.call_args
        assert call_args[0][0] == ["git", "status"]
        assert call_args[1]["cwd"] == str(tmp_path)
        assert call_args[1]["encoding"] == "utf-8"
        assert call_args[1]["timeout"] is None

    @patch("gitpanel.git.executor.subprocess.run")
    def test_arguments_are_not_split(self, mock_run, tmp_path):
        """Paths and messages with spaces stay single arguments."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_git_command(["commit", "-m", 'fix "quoted" bug'], cwd=tmp_path, executable="git")

        assert mock_run.call_args[0][0] == ["git", "commit", "-m", 'fix "quoted" bug']

    @patch("gitpanel.git.executor.subprocess.run")
    def test_failure_returns_result(self, mock_run, tmp_path):
        """Non-zero exit codes are returned, not raised."""
        mock_run.return_value = MagicMock(
            stdout="",
            stderr="fatal: not a git repository",
            returncode=128,
        )

        result = run_git_command(["status"], cwd=tmp_path)

        assert result.exit_code == 128
        assert result.stderr == "fatal: not a git repository"
        assert result.ok is False

    @patch("gitpanel.git.executor.subprocess.run")
    def test_missing_binary(self, mock_run, tmp_path):
        """Launch failures become a result with exit code -1."""
        mock_run.side_effect = FileNotFoundError("No such file or directory: 'git'")

        with LogCapture() as capture:
            result = run_git_command(["status"], cwd=tmp_path, executable="git")

        assert result.exit_code == LAUNCH_FAILED
        assert result.stdout == ""
        assert "No such file or directory" in result.stderr
        assert capture.has_message("Failed to run git")

    @patch("gitpanel.git.executor.subprocess.run")
    def test_timeout(self, mock_run, tmp_path):
        """Test git command timeout."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=5)

        result = run_git_command(["pull"], cwd=tmp_path, timeout=5)

        assert result.exit_code == LAUNCH_FAILED
        assert "timed out" in result.stderr.lower()

    @patch("gitpanel.git.executor.subprocess.run")
    def test_logs_invocation(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        with LogCapture() as capture:
            run_git_command(["add", "-A"], cwd=tmp_path, executable="git")

        assert capture.has_message("Running git command: git add -A")
        assert capture.has_message("git add exited with 0")


class TestRunGitDetached:
    """Tests for run_git_detached function."""

    @patch("gitpanel.git.executor.subprocess.Popen")
    def test_launches_without_waiting(self, mock_popen, tmp_path):
        assert run_git_detached(["gui"], cwd=tmp_path, executable="git") is True

        mock_popen.assert_called_once()
        assert mock_popen.call_args[0][0] == ["git", "gui"]
        mock_popen.return_value.wait.assert_not_called()

    @patch("gitpanel.git.executor.subprocess.Popen")
    def test_launch_failure(self, mock_popen, tmp_path):
        mock_popen.side_effect = OSError("permission denied")

        assert run_git_detached(["gui"], cwd=tmp_path) is False


class TestCommandExecutor:
    """Tests for CommandExecutor."""

    def test_from_config(self):
        executor = CommandExecutor.from_config(GitConfig(executable="/usr/bin/git", timeout=10))

        assert executor.executable == "/usr/bin/git"
        assert executor.timeout == 10

    @patch("gitpanel.git.executor.subprocess.run")
    def test_execute_passes_settings(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(stdout="main\n", stderr="", returncode=0)
        executor = CommandExecutor(executable="mygit", timeout=3)

        result = executor.execute(["branch"], tmp_path)

        assert result.stdout == "main\n"
        assert mock_run.call_args[0][0] == ["mygit", "branch"]
        assert mock_run.call_args[1]["timeout"] == 3

    @patch("gitpanel.git.executor.subprocess.Popen")
    def test_execute_detached(self, mock_popen, tmp_path):
        executor = CommandExecutor(executable="git")

        assert executor.execute_detached(["gui"], tmp_path) is True
        assert mock_popen.call_args[1]["cwd"] == str(tmp_path)
