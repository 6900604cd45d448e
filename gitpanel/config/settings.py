"""Configuration settings models using Pydantic."""

import sys
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_git_executable() -> str:
    """Name of the git binary for the running platform."""
    return "git.exe" if sys.platform.startswith("win") else "git"


class GitConfig(BaseModel):
    """Configuration for invoking the git executable."""

    executable: Optional[str] = None
    default_remote: str = "origin"
    timeout: Optional[float] = Field(default=None, gt=0)

    @field_validator("default_remote")
    @classmethod
    def validate_default_remote(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("default_remote cannot be empty")
        return v.strip()

    @property
    def resolved_executable(self) -> str:
        """The configured executable, or the platform default."""
        return self.executable or default_git_executable()


class RepositoryConfig(BaseModel):
    """Configuration for locating the repository."""

    root: Optional[str] = None
    auto_detect: bool = True

    @property
    def resolved_root(self) -> Optional[Path]:
        """Get the configured root with ~ expanded, if any."""
        if not self.root:
            return None
        return Path(self.root).expanduser()


class UIConfig(BaseModel):
    """Configuration for the terminal panel."""

    theme: Literal["default", "minimal"] = "default"
    diff_theme: str = "monokai"
    show_hints: bool = True


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @property
    def resolved_file(self) -> Optional[Path]:
        """Get the log file path with ~ expanded, if any."""
        if not self.file:
            return None
        return Path(self.file).expanduser()


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GITPANEL_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    git: GitConfig = Field(default_factory=GitConfig)
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; environment variables win over them
        return env_settings, init_settings, dotenv_settings, file_secret_settings
