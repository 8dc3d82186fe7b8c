"""CLI for cc-sessions."""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from cc_sessions import __version__

app = typer.Typer(
    name="cc-sessions",
    help="List, resume and auto-title Claude Code sessions.",
    no_args_is_help=True,
)
# Standalone titler entry point (e.g. for a SessionEnd hook): one command, one flag
titler_app = typer.Typer(
    name="cc-session-titler",
    help="Auto-title Claude Code sessions using a local LLM.",
    add_completion=False,
)
console = Console()

DryRunOption = Annotated[
    bool, typer.Option("--dry-run", help="Preview without calling the model or writing files")
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"cc-sessions {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """List, resume and auto-title Claude Code sessions."""
    pass


def _run_titler(dry_run: bool) -> None:
    from cc_sessions.config import TitlerConfig
    from cc_sessions.titler import run_once

    run_once(dry_run=dry_run, config=TitlerConfig.from_env())


@app.command()
def title(dry_run: DryRunOption = False) -> None:
    """Generate titles for untitled or modified sessions."""
    _run_titler(dry_run)


@titler_app.command()
def titler(dry_run: DryRunOption = False) -> None:
    """Generate titles for untitled or modified sessions."""
    _run_titler(dry_run)


@app.command(name="list")
def list_sessions(
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of sessions to show")] = 20,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List sessions across all projects, most recent first."""
    from cc_sessions.sessions import parse_history, sessions_to_options

    sessions = parse_history()[:limit] if limit > 0 else parse_history()

    if json_output:
        console.print_json(
            data={
                "sessions": [
                    {
                        "session_id": s.id,
                        "title": s.title,
                        "project": s.project,
                        "cwd": s.cwd,
                        "modified": s.timestamp.isoformat(),
                        "message_count": s.message_count,
                    }
                    for s in sessions
                ]
            }
        )
        return

    if not sessions:
        console.print("[yellow]No Claude Code sessions found.[/yellow]")
        console.print("[dim]Sessions are stored in ~/.claude/projects/[/dim]")
        return

    for session, option in zip(sessions, sessions_to_options(sessions), strict=True):
        console.print(f"[cyan]{session.id[:8]}[/cyan]  {escape(option.name)}")
        console.print(f"          [dim]{escape(option.description)}[/dim]")


@app.command()
def pick() -> None:
    """Pick a session interactively (fzf) and resume it."""
    from cc_sessions.picker import pick_session, resume_session
    from cc_sessions.sessions import parse_history

    sessions = parse_history()
    if not sessions:
        console.print("[yellow]No Claude Code sessions found.[/yellow]")
        console.print("[dim]Sessions are stored in ~/.claude/projects/[/dim]")
        return

    selected = pick_session(sessions)
    if selected is None:
        return

    try:
        exit_code = resume_session(selected)
    except FileNotFoundError as e:
        console.print(f"[red]Could not resume session: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
