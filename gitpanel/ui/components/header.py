"""Header component for the panel."""

from dataclasses import dataclass
from typing import Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gitpanel.orchestrator.state import PanelState
from gitpanel.ui.theme import Theme


@dataclass
class Header:
    """Header showing the repository, current branch and push target."""

    theme: Theme
    version: str = ""

    def render(self, state: PanelState) -> Panel:
        """Render the header for the given state."""
        table = Table.grid(expand=True)
        table.add_column("left", justify="left", ratio=2)
        table.add_column("right", justify="right", ratio=1)

        branch_text = Text(state.branch_label(), style=self.theme.get_ui_style("branch"))
        target_text = Text(state.push_target_label(), style=self.theme.get_ui_style("label"))
        table.add_row(branch_text, target_text)

        root_text = Text(
            f"Repo root: {state.repo_root}" if state.repo_root else "Repo root: (none)",
            style=self.theme.get_ui_style("label"),
        )
        mode_text = Text(
            "auto-detect" if state.auto_detect else "manual",
            style=self.theme.get_ui_style("hint"),
        )
        table.add_row(root_text, mode_text)

        title = "GitPanel"
        if self.version:
            title += f" v{self.version}"

        return Panel(
            table,
            title=Text(title, style=self.theme.get_ui_style("title")),
            border_style=self.theme.get_ui_style("border"),
        )


def render_selection(state: PanelState, theme: Theme) -> Optional[Table]:
    """Numbered remote and branch lists with the selection marked."""
    metadata = state.metadata
    if not metadata.remotes and not metadata.local_branches:
        return None

    table = Table(show_header=True, header_style="bold", expand=False, box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Remote")
    table.add_column("Branch")

    for i in range(max(len(metadata.remotes), len(metadata.local_branches))):
        remote = Text()
        if i < len(metadata.remotes):
            marker = "> " if i == metadata.selected_remote_index else "  "
            remote.append(marker + metadata.remotes[i])
        branch = Text()
        if i < len(metadata.local_branches):
            name = metadata.local_branches[i]
            marker = "> " if i == metadata.selected_branch_index else "  "
            style = theme.get_ui_style("branch") if name == metadata.current_branch else ""
            branch.append(marker + name, style=style)
        table.add_row(str(i + 1), remote, branch)

    return table
