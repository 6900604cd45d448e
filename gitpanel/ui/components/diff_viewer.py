"""Read-only diff display."""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from gitpanel.ui.theme import Theme

NO_DIFF_OUTPUT = "(no diff output)"


@dataclass
class DiffViewer:
    """Shows the diff of one file under a ``Diff: <path>`` title."""

    theme: Theme
    code_theme: str = "monokai"

    @staticmethod
    def title_for(path: str) -> str:
        return f"Diff: {path}"

    def render(self, path: str, diff: Optional[str]) -> Panel:
        """Render the diff text, or a placeholder when there is none."""
        if diff:
            body = Syntax(diff, "diff", theme=self.code_theme, line_numbers=False, word_wrap=True)
        else:
            body = Text(NO_DIFF_OUTPUT, style=self.theme.get_status_style("info"))

        return Panel(
            body,
            title=self.title_for(path),
            border_style=self.theme.get_ui_style("border"),
        )

    def show(self, console: Console, path: str, diff: Optional[str]) -> None:
        """Print the diff through the console pager when it is long."""
        panel = self.render(path, diff)
        if diff and diff.count("\n") > console.size.height:
            with console.pager(styles=True):
                console.print(panel)
        else:
            console.print(panel)
