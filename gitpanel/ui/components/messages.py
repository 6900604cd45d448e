"""Error, notice and outcome messages."""

from typing import Optional

from rich.panel import Panel
from rich.text import Text

from gitpanel.orchestrator.state import ActionOutcome
from gitpanel.ui.theme import Theme


def render_error(message: str, theme: Theme) -> Panel:
    """The panel's error slot."""
    return Panel(
        Text(message, style=theme.get_status_style("error")),
        title="Git message",
        border_style=theme.get_status_style("error"),
    )


def render_notice(title: str, message: str, theme: Theme) -> Panel:
    """A blocking notice such as a refused commit."""
    return Panel(
        Text(message, style=theme.get_status_style("notice")),
        title=title,
        border_style=theme.get_status_style("notice"),
    )


def render_outcome(outcome: ActionOutcome, theme: Theme) -> Optional[Text]:
    """One-line summary of a finished action, or None if it was refused."""
    if outcome.notice is not None:
        return None

    text = Text()
    if outcome.succeeded:
        text.append("✓ ", style=theme.get_status_style("success"))
        text.append(f"{outcome.action.value} done")
    else:
        text.append("✗ ", style=theme.get_status_style("error"))
        text.append(f"{outcome.action.value} failed")

    if outcome.result is not None and outcome.result.args:
        text.append(f"  git {' '.join(outcome.result.args)}", style=theme.get_status_style("info"))
    return text
