"""Theme definitions and color schemes for the panel."""

from dataclasses import dataclass, field
from typing import Literal

from rich.style import Style


@dataclass
class Theme:
    """Color scheme and styling definitions for the panel."""

    name: str
    description: str

    # Styles keyed by porcelain state character (M, A, D, R, ?, U, ...)
    state_styles: dict[str, Style] = field(default_factory=dict)

    # UI element styles
    ui_styles: dict[str, Style] = field(default_factory=dict)

    # Outcome indicators
    status_styles: dict[str, Style] = field(default_factory=dict)

    def get_state_style(self, state: str) -> Style:
        """Get the style for a single porcelain state character."""
        return self.state_styles.get(state, Style())

    def get_ui_style(self, element: str) -> Style:
        """Get the style for a UI element."""
        return self.ui_styles.get(element, Style())

    def get_status_style(self, status: str) -> Style:
        """Get the style for a status indicator."""
        return self.status_styles.get(status, Style())


# Default theme - git's own status colors
DEFAULT_THEME = Theme(
    name="default",
    description="Git-like colors for staged, modified and untracked files",
    state_styles={
        "M": Style(color="yellow"),
        "A": Style(color="green"),
        "D": Style(color="red"),
        "R": Style(color="cyan"),
        "C": Style(color="cyan"),
        "U": Style(color="bright_red", bold=True),
        "?": Style(color="grey58"),
        "!": Style(color="grey42"),
    },
    ui_styles={
        "title": Style(color="bright_white", bold=True),
        "branch": Style(color="green", bold=True),
        "label": Style(color="grey58"),
        "border": Style(color="grey50"),
        "staged_path": Style(color="green"),
        "path": Style(color="white"),
        "hint": Style(color="grey58", italic=True),
    },
    status_styles={
        "success": Style(color="green"),
        "error": Style(color="bright_red"),
        "notice": Style(color="yellow"),
        "info": Style(color="grey58"),
    },
)


# Minimal theme - reduced colors for distraction-free work
MINIMAL_THEME = Theme(
    name="minimal",
    description="Reduced colors for distraction-free work",
    state_styles={
        "U": Style(color="red"),
        "?": Style(color="grey50"),
    },
    ui_styles={
        "title": Style(color="white", bold=True),
        "branch": Style(color="white", bold=True),
        "label": Style(color="grey50"),
        "border": Style(color="grey35"),
        "staged_path": Style(color="white", bold=True),
        "path": Style(color="white"),
        "hint": Style(color="grey50"),
    },
    status_styles={
        "success": Style(color="white"),
        "error": Style(color="red"),
        "notice": Style(color="white", bold=True),
        "info": Style(color="grey50"),
    },
)


# Theme registry
THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "minimal": MINIMAL_THEME,
}

ThemeName = Literal["default", "minimal"]


def get_theme(name: ThemeName) -> Theme:
    """Get a theme by name.

    Raises:
        KeyError: If theme name is not found
    """
    if name not in THEMES:
        raise KeyError(f"Unknown theme: {name}. Available: {list(THEMES.keys())}")
    return THEMES[name]


def list_themes() -> list[str]:
    """Get list of available theme names."""
    return list(THEMES.keys())
