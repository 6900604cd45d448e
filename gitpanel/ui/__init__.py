"""GitPanel terminal UI.

This package provides the display surface: rich components for the
header, changed-file list, diffs and messages, and the prompt_toolkit
loop that turns slash commands into orchestrator actions.
"""

from gitpanel.ui.app import PanelApp, create_panel_app
from gitpanel.ui.theme import THEMES, Theme, ThemeName, get_theme, list_themes

__all__ = [
    "PanelApp",
    "create_panel_app",
    "Theme",
    "ThemeName",
    "THEMES",
    "get_theme",
    "list_themes",
]
