"""CLI entry point for GitPanel."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gitpanel import __version__
from gitpanel.config import Settings, create_default_config, get_settings, load_settings
from gitpanel.errors import GitPanelError, InvalidConfigError, NotARepositoryError
from gitpanel.git.utils import is_repository
from gitpanel.orchestrator import ActionOutcome, Orchestrator, PanelState
from gitpanel.ui.components import DiffViewer, FileList
from gitpanel.ui.theme import get_theme
from gitpanel.utils.logging import configure_logging

app = typer.Typer(
    name="gitpanel",
    help="GitPanel - a small terminal front end for everyday git work",
    add_completion=True,
    no_args_is_help=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]GitPanel[/bold] version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        "-C",
        help="Repository root (default: detected from the current directory)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """GitPanel - stage, commit, push and switch branches from the terminal.

    Without a subcommand, starts the interactive panel.
    """
    settings = _load_settings(config, verbose)
    ctx.obj = {"settings": settings, "repo": repo}

    # If a subcommand is being invoked, don't enter interactive mode
    if ctx.invoked_subcommand is not None:
        return

    if config is None:
        create_default_config()

    start_interactive(settings, repo)


def start_interactive(settings: Settings, repo: Optional[Path] = None) -> None:
    """Start the interactive panel."""
    from gitpanel.ui import create_panel_app

    panel = create_panel_app(settings, repo_root=repo, console=console)
    panel.run()


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _load_settings(config: Optional[Path], verbose: bool) -> Settings:
    """Load settings and configure logging from them."""
    try:
        if config:
            settings = load_settings(config_path=config, force_reload=True)
        else:
            settings = get_settings()
    except InvalidConfigError as e:
        console.print(Text(f"Configuration error: {e.message}", style="red"))
        raise typer.Exit(1)

    configure_logging(settings.logging, verbose=verbose)
    return settings


def _create_orchestrator(settings: Settings) -> Orchestrator:
    return Orchestrator.from_settings(settings)


def _open_repository(ctx: typer.Context) -> tuple[Orchestrator, PanelState]:
    """Create an orchestrator and a state bound to the target repository.

    Raises:
        NotARepositoryError: If no repository is given, configured or found.
    """
    settings: Settings = ctx.obj["settings"]
    orchestrator = _create_orchestrator(settings)

    root = ctx.obj["repo"] or settings.repository.resolved_root
    if root is not None:
        root = Path(root).expanduser().resolve()
        if not is_repository(root):
            raise NotARepositoryError(str(root))
        state = orchestrator.new_state(repo_root=root, auto_detect=False)
        orchestrator.reload_metadata(state)
        return orchestrator, state

    state = orchestrator.new_state(auto_detect=settings.repository.auto_detect)
    orchestrator.activate(state)
    if state.repo_root is None:
        raise NotARepositoryError(str(Path.cwd()))
    return orchestrator, state


def _session(ctx: typer.Context) -> tuple[Orchestrator, PanelState]:
    try:
        return _open_repository(ctx)
    except GitPanelError as e:
        console.print(Text(e.message, style="red"))
        raise typer.Exit(1)


def _theme(ctx: typer.Context):
    return get_theme(ctx.obj["settings"].ui.theme)


def _report(outcome: ActionOutcome, state: PanelState) -> None:
    """Print the result of an action; exit with 1 if it did not succeed."""
    if outcome.notice is not None:
        console.print(Text(outcome.notice, style="yellow"))
        raise typer.Exit(1)

    if not outcome.succeeded:
        message = state.last_error or f"{outcome.action.value} failed"
        console.print(Text(message, style="red"))
        raise typer.Exit(1)

    if outcome.result is not None:
        output = outcome.result.stdout.strip()
        if output:
            console.print(output, markup=False, highlight=False)
    console.print(f"[green]✓[/green] {outcome.action.value} done")


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the current branch and changed files."""
    orchestrator, state = _session(ctx)
    outcome = orchestrator.refresh_status(state)
    if not outcome.succeeded:
        _report(outcome, state)

    settings: Settings = ctx.obj["settings"]
    console.print(state.branch_label(), markup=False)
    console.print(FileList(_theme(ctx), show_hints=False).render(state.files))
    if settings.ui.show_hints and state.files:
        console.print("[dim]Stage with 'gitpanel stage <path>'.[/dim]")


@app.command()
def stage(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to stage"),
) -> None:
    """Stage one file."""
    orchestrator, state = _session(ctx)
    _report(orchestrator.stage(state, path), state)


@app.command()
def unstage(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to unstage"),
) -> None:
    """Unstage one file, keeping its working-tree changes."""
    orchestrator, state = _session(ctx)
    _report(orchestrator.unstage(state, path), state)


@app.command("stage-all")
def stage_all(ctx: typer.Context) -> None:
    """Stage every change in the working tree."""
    orchestrator, state = _session(ctx)
    _report(orchestrator.stage_all(state), state)


@app.command()
def diff(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to diff"),
) -> None:
    """Show the working-tree diff of one file."""
    orchestrator, state = _session(ctx)
    outcome = orchestrator.diff(state, path)
    if not outcome.succeeded:
        _report(outcome, state)

    viewer = DiffViewer(_theme(ctx), code_theme=ctx.obj["settings"].ui.diff_theme)
    console.print(viewer.render(path, outcome.output))


@app.command()
def commit(
    ctx: typer.Context,
    message: str = typer.Option(..., "--message", "-m", help="Commit message"),
    and_push: bool = typer.Option(False, "--push", help="Push after a successful commit"),
) -> None:
    """Commit staged changes."""
    orchestrator, state = _session(ctx)
    state.commit_message = message
    if and_push:
        _report(orchestrator.commit_and_push(state), state)
    else:
        _report(orchestrator.commit(state), state)


def _apply_target(
    orchestrator: Orchestrator,
    state: PanelState,
    remote: Optional[str],
    branch: Optional[str],
) -> None:
    if remote is not None:
        orchestrator.set_push_remote(state, remote)
    if branch is not None:
        orchestrator.set_push_branch(state, branch)


@app.command()
def push(
    ctx: typer.Context,
    remote: Optional[str] = typer.Option(None, "--remote", "-r", help="Remote to push to"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to push"),
) -> None:
    """Push to the selected remote and branch."""
    orchestrator, state = _session(ctx)
    _apply_target(orchestrator, state, remote, branch)
    console.print(Text(state.push_target_label(), style="dim"))
    _report(orchestrator.push(state), state)


@app.command()
def pull(
    ctx: typer.Context,
    remote: Optional[str] = typer.Option(None, "--remote", "-r", help="Remote to pull from"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to pull"),
) -> None:
    """Pull from the selected remote and branch."""
    orchestrator, state = _session(ctx)
    _apply_target(orchestrator, state, remote, branch)
    _report(orchestrator.pull(state), state)


@app.command()
def checkout(
    ctx: typer.Context,
    branch: Optional[str] = typer.Argument(None, help="Local branch (default: current)"),
) -> None:
    """Check out a local branch."""
    orchestrator, state = _session(ctx)
    if branch is not None and not orchestrator.select_branch_by_name(state, branch):
        console.print(Text(f"'{branch}' is not a local branch", style="red"))
        raise typer.Exit(1)
    _report(orchestrator.checkout(state), state)
    console.print(state.branch_label(), markup=False)


@app.command()
def branches(ctx: typer.Context) -> None:
    """List local branches."""
    _, state = _session(ctx)
    metadata = state.metadata

    if not metadata.local_branches:
        console.print("[dim]No local branches found.[/dim]")
        return

    table = Table(title="Local Branches")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Branch", style="green")
    table.add_column("Current", justify="center")

    for i, name in enumerate(metadata.local_branches, 1):
        table.add_row(str(i), name, "✓" if name == metadata.current_branch else "")

    console.print(table)


@app.command()
def remotes(ctx: typer.Context) -> None:
    """List configured remotes."""
    _, state = _session(ctx)
    metadata = state.metadata

    if not metadata.remotes:
        console.print("[dim]No remotes configured.[/dim]")
    for name in metadata.remotes:
        console.print(name, markup=False, highlight=False)
    console.print(Text(state.push_target_label(), style="dim"))


@app.command()
def gui(ctx: typer.Context) -> None:
    """Open the system git GUI for the repository."""
    orchestrator, state = _session(ctx)
    outcome = orchestrator.open_gui(state)
    if not outcome.succeeded:
        console.print("[red]Could not launch git gui.[/red]")
        raise typer.Exit(1)
    console.print("[green]✓[/green] git gui launched")


if __name__ == "__main__":
    app()
