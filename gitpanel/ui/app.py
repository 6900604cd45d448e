"""Interactive terminal panel for GitPanel."""

import logging
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.text import Text

from gitpanel import __version__
from gitpanel.config import Settings
from gitpanel.errors import CommandError
from gitpanel.orchestrator import ActionOutcome, Orchestrator, PanelState
from gitpanel.ui.components import (
    DiffViewer,
    FileList,
    Header,
    render_error,
    render_notice,
    render_outcome,
    render_selection,
)
from gitpanel.ui.handlers.commands import CommandHandler, CommandResult
from gitpanel.ui.theme import get_theme

logger = logging.getLogger(__name__)

PROMPT = "git> "

NOTICE_TITLES = {
    "commit": "Commit",
    "checkout": "Checkout",
}


class PanelApp:
    """The interactive panel.

    Renders the header, the changed-file list and messages with rich, and
    reads slash commands through a prompt_toolkit session. Plain text typed
    at the prompt becomes the pending commit message.
    """

    def __init__(
        self,
        settings: Settings,
        orchestrator: Orchestrator,
        state: Optional[PanelState] = None,
        console: Optional[Console] = None,
        start_path: Optional[Path] = None,
    ):
        """Initialize the panel.

        Args:
            settings: Application settings
            orchestrator: Performs the git actions
            state: Existing panel state; a fresh one is created if omitted
            console: Console to render to
            start_path: Directory repository auto-detection starts from
        """
        self.settings = settings
        self.orchestrator = orchestrator
        self.state = state or orchestrator.new_state(auto_detect=settings.repository.auto_detect)
        self.console = console or Console()
        self.start_path = start_path
        self.theme = get_theme(settings.ui.theme)

        self.header = Header(theme=self.theme, version=__version__)
        self.file_list = FileList(theme=self.theme, show_hints=settings.ui.show_hints)
        self.diff_viewer = DiffViewer(theme=self.theme, code_theme=settings.ui.diff_theme)
        self.command_handler = CommandHandler(self)

        self.running = False
        self._session: Optional[PromptSession] = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def show_header(self) -> None:
        self.console.print(self.header.render(self.state))
        if not self.state.repo_root:
            self.console.print(render_notice(
                "No repository",
                "No .git folder found. Set the repo root with /root <path> "
                "or run GitPanel inside a git repository.",
                self.theme,
            ))

    def show_files(self) -> None:
        self.console.print(self.file_list.render(self.state.files))

    def show_selection(self) -> None:
        table = render_selection(self.state, self.theme)
        if table is None:
            self.console.print(Text("(no remotes or branches)", style="dim"))
        else:
            self.console.print(table)
        self.console.print(Text(self.state.push_target_label(), style="dim"))

    def show_diff(self, path: str, diff: Optional[str]) -> None:
        self.diff_viewer.show(self.console, path, diff)

    def show_outcome(self, outcome: ActionOutcome) -> None:
        """Report an action: its notice, a summary line and the error slot."""
        if outcome.notice is not None:
            title = NOTICE_TITLES.get(outcome.action.value, outcome.action.value.title())
            self.console.print(render_notice(title, outcome.notice, self.theme))
            return

        line = render_outcome(outcome, self.theme)
        if line is not None:
            self.console.print(line)
        if self.state.last_error:
            self.console.print(render_error(self.state.last_error, self.theme))

    def render(self) -> None:
        """Render the whole panel."""
        self.show_header()
        if self.state.last_error:
            self.console.print(render_error(self.state.last_error, self.theme))
        self.show_files()
        if self.settings.ui.show_hints:
            self.console.print(Text(
                "Type /help for commands; plain text sets the commit message.",
                style=self.theme.get_ui_style("hint"),
            ))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _prompt_session(self) -> PromptSession:
        if self._session is None:
            names = sorted({cmd.name for cmd in self.command_handler.commands})
            self._session = PromptSession(
                history=InMemoryHistory(),
                completer=WordCompleter(names, sentence=True),
            )
        return self._session

    def handle_input(self, text: str) -> CommandResult:
        """Process one line of input."""
        text = text.strip()
        if not text:
            return CommandResult.SUCCESS

        if not self.command_handler.is_command(text):
            self.state.commit_message = text
            self.console.print(Text(
                f"Commit message set: {text}  (/commit to commit)",
                style=self.theme.get_ui_style("hint"),
            ))
            return CommandResult.SUCCESS

        try:
            return self.command_handler.handle(text)
        except CommandError as e:
            logger.debug(f"Command rejected: {e.to_dict()}")
            self.console.print(Text(e.message, style=self.theme.get_status_style("error")))
            return CommandResult.ERROR

    def start(self) -> None:
        """Detect the repository and load its status."""
        self.orchestrator.activate(self.state, self.start_path)
        if self.state.repo_root:
            self.orchestrator.refresh_status(self.state)
        self.render()

    def run(self) -> None:
        """Run the panel until /quit or end of input."""
        self.start()
        self.running = True
        session = self._prompt_session()

        while self.running:
            try:
                text = session.prompt(PROMPT)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            if self.handle_input(text) == CommandResult.EXIT:
                break

        self.running = False
        self.console.print(Text("Goodbye.", style="dim"))


def create_panel_app(
    settings: Settings,
    repo_root: Optional[Path] = None,
    console: Optional[Console] = None,
) -> PanelApp:
    """Build a panel from settings, optionally pinned to ``repo_root``."""
    orchestrator = Orchestrator.from_settings(settings)
    root = repo_root or settings.repository.resolved_root
    state = orchestrator.new_state(
        repo_root=root,
        auto_detect=root is None and settings.repository.auto_detect,
    )
    return PanelApp(settings=settings, orchestrator=orchestrator, state=state, console=console)
