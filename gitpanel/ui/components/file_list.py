"""Changed-file list component."""

from dataclasses import dataclass

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gitpanel.git.status import FileStatusEntry
from gitpanel.ui.theme import Theme

EMPTY_MESSAGE = "No changes (working tree clean) or status not loaded yet."


@dataclass
class FileList:
    """Table of changed files with a row number, code, path and actions.

    Row numbers are 1-based so panel commands like ``/stage 2`` can refer
    to them.
    """

    theme: Theme
    show_hints: bool = True

    def render_code(self, entry: FileStatusEntry) -> Text:
        """Color each state column separately, like ``git status -s``."""
        text = Text()
        text.append(entry.index_state, style=self.theme.get_state_style(entry.index_state))
        text.append(entry.work_tree_state, style=self.theme.get_state_style(entry.work_tree_state))
        return text

    @staticmethod
    def action_hint(entry: FileStatusEntry) -> str:
        """Actions offered for the row."""
        return "diff | unstage" if entry.is_staged else "diff | stage"

    def render(self, entries: list[FileStatusEntry]) -> Panel:
        """Render entries as a table inside a panel."""
        if not entries:
            return Panel(
                Text(EMPTY_MESSAGE, style=self.theme.get_status_style("info")),
                title="Changed Files",
                border_style=self.theme.get_ui_style("border"),
            )

        table = Table(show_header=True, header_style="bold", expand=True, box=None)
        table.add_column("#", justify="right", style="dim", width=4)
        table.add_column("Code", width=4, no_wrap=True)
        table.add_column("Path", ratio=1)
        if self.show_hints:
            table.add_column("Actions", style="dim", no_wrap=True)

        for number, entry in enumerate(entries, start=1):
            path_style = "staged_path" if entry.is_staged else "path"
            row = [
                str(number),
                self.render_code(entry),
                Text(entry.path, style=self.theme.get_ui_style(path_style)),
            ]
            if self.show_hints:
                row.append(self.action_hint(entry))
            table.add_row(*row)

        staged = sum(1 for entry in entries if entry.is_staged)
        return Panel(
            table,
            title=f"Changed Files ({len(entries)}, {staged} staged)",
            border_style=self.theme.get_ui_style("border"),
        )
