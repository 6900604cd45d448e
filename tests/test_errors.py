"""Tests for the exception hierarchy."""

from gitpanel.errors import (
    CommandError,
    ConfigurationError,
    GitError,
    GitPanelError,
    InputValidationError,
    InvalidConfigError,
    NotARepositoryError,
    UIError,
)


class TestGitPanelError:
    """Tests for the base error."""

    def test_str_with_code(self):
        error = GitPanelError("Something broke", code="BROKEN")
        assert str(error) == "[BROKEN] Something broke"

    def test_str_without_code(self):
        assert str(GitPanelError("plain")) == "plain"

    def test_to_dict(self):
        error = InputValidationError("commit_message", "Commit message is empty.")

        data = error.to_dict()

        assert data["error_type"] == "InputValidationError"
        assert data["code"] == "INPUT_VALIDATION_ERROR"
        assert data["details"] == {"field": "commit_message", "reason": "Commit message is empty."}


class TestSubclasses:
    """Tests for specific errors."""

    def test_invalid_config_truncates_value(self):
        error = InvalidConfigError("git.timeout", "x" * 500, "must be positive")

        assert isinstance(error, ConfigurationError)
        assert len(error.details["value"]) == 100
        assert "git.timeout" in error.message

    def test_git_error_is_base(self):
        error = GitError("repository is locked")

        assert isinstance(error, GitPanelError)
        assert error.details == {}
        assert str(error) == "repository is locked"

    def test_not_a_repository(self):
        error = NotARepositoryError("/tmp/nowhere")

        assert isinstance(error, GitError)
        assert error.code == "NOT_A_REPOSITORY"
        assert error.details["path"] == "/tmp/nowhere"
        assert error.message == "Not a git repository: /tmp/nowhere"

    def test_command_error(self):
        error = CommandError("/stage", "usage: /stage <row|path>")

        assert isinstance(error, UIError)
        assert error.message == "Command '/stage' failed: usage: /stage <row|path>"
