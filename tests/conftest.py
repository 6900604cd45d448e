"""Pytest configuration and fixtures for GitPanel tests."""

import os
from pathlib import Path
from typing import Generator

import pytest

from gitpanel.config import Settings, reset_settings
from gitpanel.git.executor import OperationResult
from gitpanel.orchestrator import Orchestrator, PanelState


class FakeExecutor:
    """Scripted stand-in for CommandExecutor.

    Responses are keyed by the exact argument list. Unscripted commands
    succeed with empty output. Every call is recorded.
    """

    def __init__(self):
        self.responses: dict[tuple[str, ...], OperationResult] = {}
        self.calls: list[list[str]] = []
        self.detached: list[list[str]] = []
        self.detached_ok = True

    def script(
        self,
        args: list[str],
        stdout: str = "",
        stderr: str = "",
        exit_code: int = 0,
    ) -> None:
        self.responses[tuple(args)] = OperationResult(
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            args=tuple(args),
        )

    def execute(self, args: list[str], cwd) -> OperationResult:
        self.calls.append(list(args))
        result = self.responses.get(tuple(args))
        if result is None:
            return OperationResult(args=tuple(args))
        return result

    def execute_detached(self, args: list[str], cwd) -> bool:
        self.detached.append(list(args))
        return self.detached_ok

    def called(self, args: list[str]) -> bool:
        return list(args) in self.calls


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch) -> Generator[Path, None, None]:
    """Keep tests away from ~/.gitpanel and GITPANEL_* variables."""
    config_dir = tmp_path_factory.mktemp("gitpanel-home")
    monkeypatch.setattr("gitpanel.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("gitpanel.config.CONFIG_FILE", config_dir / "config.yaml")
    for name in list(os.environ):
        if name.startswith("GITPANEL_"):
            monkeypatch.delenv(name)

    reset_settings()
    yield config_dir
    reset_settings()


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """A directory that looks like a repository root."""
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def orchestrator(fake_executor: FakeExecutor) -> Orchestrator:
    return Orchestrator(executor=fake_executor)


@pytest.fixture
def state(orchestrator: Orchestrator, repo_dir: Path) -> PanelState:
    """Panel state bound to ``repo_dir`` with auto-detection off."""
    return orchestrator.new_state(repo_root=repo_dir, auto_detect=False)


@pytest.fixture
def test_settings() -> Settings:
    return Settings()


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
git:
  default_remote: upstream
  timeout: 30

ui:
  theme: minimal
  show_hints: false

logging:
  level: debug
"""
    )
    return config_path
