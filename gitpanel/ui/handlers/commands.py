"""Slash command handlers for the panel."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from rich.table import Table

from gitpanel.errors import CommandError
from gitpanel.orchestrator.state import ActionOutcome

if TYPE_CHECKING:
    from gitpanel.ui.app import PanelApp


# Order of command categories in the help display
COMMAND_GROUPS: tuple[str, ...] = (
    "Files",
    "Commit",
    "Branch & Remote",
    "Repository",
    "System",
)


class CommandResult(Enum):
    """Result of command execution."""

    SUCCESS = "success"
    ERROR = "error"
    EXIT = "exit"


@dataclass
class Command:
    """A slash command definition.

    Commands take at most one argument: everything after the command name,
    so paths with spaces and commit messages need no quoting.
    """

    name: str
    aliases: list[str]
    description: str
    usage: str
    handler: Callable[[Optional[str]], CommandResult]
    category: str = "Other"
    requires_argument: bool = False


class CommandHandler:
    """Handles slash commands typed into the panel."""

    def __init__(self, app: "PanelApp"):
        """Initialize command handler.

        Args:
            app: Parent PanelApp instance
        """
        self.app = app
        self._commands: dict[str, Command] = {}
        self._register_default_commands()

    def _register_default_commands(self) -> None:
        """Register the default commands."""
        commands = [
            Command(
                name="/status",
                aliases=["/st", "/refresh"],
                description="Refresh the changed-file list",
                usage="/status",
                handler=self._cmd_status,
                category="Files",
            ),
            Command(
                name="/stage",
                aliases=["/add"],
                description="Stage a file by row number or path",
                usage="/stage <row|path>",
                handler=self._cmd_stage,
                category="Files",
                requires_argument=True,
            ),
            Command(
                name="/unstage",
                aliases=["/reset"],
                description="Unstage a file by row number or path",
                usage="/unstage <row|path>",
                handler=self._cmd_unstage,
                category="Files",
                requires_argument=True,
            ),
            Command(
                name="/stage-all",
                aliases=["/add-all"],
                description="Stage every change",
                usage="/stage-all",
                handler=self._cmd_stage_all,
                category="Files",
            ),
            Command(
                name="/diff",
                aliases=["/d"],
                description="Show the diff of a file",
                usage="/diff <row|path>",
                handler=self._cmd_diff,
                category="Files",
                requires_argument=True,
            ),
            Command(
                name="/commit",
                aliases=["/ci"],
                description="Commit staged changes",
                usage="/commit <message>",
                handler=self._cmd_commit,
                category="Commit",
            ),
            Command(
                name="/commit-push",
                aliases=["/cp"],
                description="Commit, then push if the commit succeeded",
                usage="/commit-push <message>",
                handler=self._cmd_commit_push,
                category="Commit",
            ),
            Command(
                name="/push",
                aliases=[],
                description="Push to the selected remote and branch",
                usage="/push",
                handler=self._cmd_push,
                category="Commit",
            ),
            Command(
                name="/pull",
                aliases=[],
                description="Pull from the selected remote and branch",
                usage="/pull",
                handler=self._cmd_pull,
                category="Commit",
            ),
            Command(
                name="/checkout",
                aliases=["/co"],
                description="Check out the selected (or given) local branch",
                usage="/checkout [row|branch]",
                handler=self._cmd_checkout,
                category="Branch & Remote",
            ),
            Command(
                name="/remote",
                aliases=[],
                description="Show remotes or choose the push/pull remote",
                usage="/remote [row|name]",
                handler=self._cmd_remote,
                category="Branch & Remote",
            ),
            Command(
                name="/branch",
                aliases=["/br"],
                description="Show branches or choose the push/pull branch",
                usage="/branch [row|name]",
                handler=self._cmd_branch,
                category="Branch & Remote",
            ),
            Command(
                name="/reload",
                aliases=[],
                description="Reload remotes and branches",
                usage="/reload",
                handler=self._cmd_reload,
                category="Branch & Remote",
            ),
            Command(
                name="/root",
                aliases=[],
                description="Show or set the repository root",
                usage="/root [path]",
                handler=self._cmd_root,
                category="Repository",
            ),
            Command(
                name="/redetect",
                aliases=[],
                description="Detect the repository from the working directory",
                usage="/redetect",
                handler=self._cmd_redetect,
                category="Repository",
            ),
            Command(
                name="/gui",
                aliases=[],
                description="Open the system git GUI",
                usage="/gui",
                handler=self._cmd_gui,
                category="Repository",
            ),
            Command(
                name="/help",
                aliases=["/h", "/?"],
                description="Show available commands",
                usage="/help",
                handler=self._cmd_help,
                category="System",
            ),
            Command(
                name="/quit",
                aliases=["/exit", "/q"],
                description="Exit GitPanel",
                usage="/quit",
                handler=self._cmd_quit,
                category="System",
            ),
        ]

        for cmd in commands:
            self._commands[cmd.name] = cmd
            for alias in cmd.aliases:
                self._commands[alias] = cmd

    def is_command(self, text: str) -> bool:
        """Check if text is a command."""
        return text.strip().startswith("/")

    def get_command(self, text: str) -> Optional[Command]:
        """Look up the command for a line of input."""
        if not text.strip():
            return None
        name = text.strip().split()[0].lower()
        return self._commands.get(name)

    @property
    def commands(self) -> list[Command]:
        """Unique registered commands, in registration order."""
        seen: list[Command] = []
        for cmd in self._commands.values():
            if cmd not in seen:
                seen.append(cmd)
        return seen

    def commands_by_category(self) -> dict[str, list[Command]]:
        """Commands grouped by category, known categories first."""
        groups: dict[str, list[Command]] = {name: [] for name in COMMAND_GROUPS}
        for cmd in self.commands:
            groups.setdefault(cmd.category, []).append(cmd)
        return {name: cmds for name, cmds in groups.items() if cmds}

    def handle(self, text: str) -> CommandResult:
        """Execute a command line.

        Raises:
            CommandError: If the command is unknown or used incorrectly.
        """
        cmd = self.get_command(text)
        if cmd is None:
            name = text.strip().split()[0] if text.strip() else text
            raise CommandError(name, "unknown command (try /help)")

        parts = text.strip().split(maxsplit=1)
        argument = parts[1].strip() if len(parts) > 1 else None

        if cmd.requires_argument and not argument:
            raise CommandError(cmd.name, f"usage: {cmd.usage}")

        return cmd.handler(argument)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _state(self):
        return self.app.state

    @property
    def _orchestrator(self):
        return self.app.orchestrator

    def _resolve_path(self, command: str, argument: str) -> str:
        """Turn a row number into a path; anything else is a path already.

        A number outside the listed rows is still accepted as a file name
        when such a file is listed or exists in the repository.
        """
        if not argument.isdigit():
            return argument

        row = int(argument)
        files = self._state.files
        if 1 <= row <= len(files):
            return files[row - 1].target_path

        root = self._state.repo_root
        listed = any(entry.target_path == argument for entry in files)
        if listed or (root is not None and (root / argument).exists()):
            return argument
        raise CommandError(command, f"no file in row {row}")

    @staticmethod
    def _resolve_row(command: str, argument: str, items: list[str]) -> Optional[int]:
        """0-based index for a row number, None if argument is a name."""
        if not argument.isdigit():
            return None
        row = int(argument)
        if not 1 <= row <= len(items):
            raise CommandError(command, f"no entry in row {row}")
        return row - 1

    def _finish(self, outcome: ActionOutcome, show_files: bool = True) -> CommandResult:
        self.app.show_outcome(outcome)
        if show_files:
            self.app.show_files()
        return CommandResult.SUCCESS if outcome.succeeded else CommandResult.ERROR

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _cmd_status(self, argument: Optional[str]) -> CommandResult:
        return self._finish(self._orchestrator.refresh_status(self._state))

    def _cmd_stage(self, argument: Optional[str]) -> CommandResult:
        path = self._resolve_path("/stage", argument or "")
        return self._finish(self._orchestrator.stage(self._state, path))

    def _cmd_unstage(self, argument: Optional[str]) -> CommandResult:
        path = self._resolve_path("/unstage", argument or "")
        return self._finish(self._orchestrator.unstage(self._state, path))

    def _cmd_stage_all(self, argument: Optional[str]) -> CommandResult:
        return self._finish(self._orchestrator.stage_all(self._state))

    def _cmd_diff(self, argument: Optional[str]) -> CommandResult:
        path = self._resolve_path("/diff", argument or "")
        outcome = self._orchestrator.diff(self._state, path)
        if outcome.ran_command:
            self.app.show_diff(path, outcome.output)
        return self._finish(outcome, show_files=False)

    # ------------------------------------------------------------------
    # Commit / push / pull
    # ------------------------------------------------------------------

    def _cmd_commit(self, argument: Optional[str]) -> CommandResult:
        if argument is not None:
            self._state.commit_message = argument
        return self._finish(self._orchestrator.commit(self._state))

    def _cmd_commit_push(self, argument: Optional[str]) -> CommandResult:
        if argument is not None:
            self._state.commit_message = argument
        return self._finish(self._orchestrator.commit_and_push(self._state))

    def _cmd_push(self, argument: Optional[str]) -> CommandResult:
        return self._finish(self._orchestrator.push(self._state), show_files=False)

    def _cmd_pull(self, argument: Optional[str]) -> CommandResult:
        return self._finish(self._orchestrator.pull(self._state))

    # ------------------------------------------------------------------
    # Branch & remote
    # ------------------------------------------------------------------

    def _cmd_checkout(self, argument: Optional[str]) -> CommandResult:
        if argument:
            branches = self._state.metadata.local_branches
            index = self._resolve_row("/checkout", argument, branches)
            if index is not None:
                self._orchestrator.select_branch(self._state, index)
            elif not self._orchestrator.select_branch_by_name(self._state, argument):
                raise CommandError("/checkout", f"'{argument}' is not a local branch")
        return self._finish(self._orchestrator.checkout(self._state))

    def _cmd_remote(self, argument: Optional[str]) -> CommandResult:
        if argument:
            index = self._resolve_row("/remote", argument, self._state.metadata.remotes)
            if index is not None:
                self._orchestrator.select_remote(self._state, index)
            else:
                self._orchestrator.set_push_remote(self._state, argument)
        self.app.show_selection()
        return CommandResult.SUCCESS

    def _cmd_branch(self, argument: Optional[str]) -> CommandResult:
        if argument:
            index = self._resolve_row("/branch", argument, self._state.metadata.local_branches)
            if index is not None:
                self._orchestrator.select_branch(self._state, index)
            else:
                self._orchestrator.set_push_branch(self._state, argument)
        self.app.show_selection()
        return CommandResult.SUCCESS

    def _cmd_reload(self, argument: Optional[str]) -> CommandResult:
        self._orchestrator.reload_metadata(self._state)
        self.app.show_selection()
        return CommandResult.SUCCESS

    # ------------------------------------------------------------------
    # Repository
    # ------------------------------------------------------------------

    def _cmd_root(self, argument: Optional[str]) -> CommandResult:
        if argument:
            self._orchestrator.set_repo_root(self._state, argument)
        self.app.show_header()
        return CommandResult.SUCCESS

    def _cmd_redetect(self, argument: Optional[str]) -> CommandResult:
        self._orchestrator.redetect(self._state, self.app.start_path)
        self.app.show_header()
        return CommandResult.SUCCESS

    def _cmd_gui(self, argument: Optional[str]) -> CommandResult:
        return self._finish(self._orchestrator.open_gui(self._state), show_files=False)

    # ------------------------------------------------------------------
    # System
    # ------------------------------------------------------------------

    def _cmd_help(self, argument: Optional[str]) -> CommandResult:
        table = Table(title="Commands", show_header=True, header_style="bold")
        table.add_column("Command", style="cyan", no_wrap=True)
        table.add_column("Description")
        table.add_column("Aliases", style="dim")

        for group, commands in self.commands_by_category().items():
            table.add_section()
            table.add_row(f"[bold]{group}[/bold]", "", "")
            for cmd in commands:
                table.add_row(cmd.usage, cmd.description, ", ".join(cmd.aliases))

        self.app.console.print(table)
        return CommandResult.SUCCESS

    def _cmd_quit(self, argument: Optional[str]) -> CommandResult:
        return CommandResult.EXIT
