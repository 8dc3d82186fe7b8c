"""Interactive session selection with fzf and resume via the claude CLI."""

import subprocess

from rich.console import Console

from cc_sessions.models import Session
from cc_sessions.sessions import sessions_to_options

console = Console()

RESUME_COMMAND = "claude"


def pick_session(sessions: list[Session]) -> Session | None:
    """Run fzf over the sessions and return the selected one, or None if cancelled."""
    if not sessions:
        console.print("[yellow]No sessions to select from[/yellow]")
        return None

    # Format: index[TAB]title[TAB]description
    options = sessions_to_options(sessions)
    lines = [f"{i}\t{opt.name}\t{opt.description}" for i, opt in enumerate(options)]
    fzf_input = "\n".join(lines)

    try:
        proc = subprocess.run(
            [
                "fzf",
                "--with-nth=2,3",
                "--delimiter=\t",
                "--no-sort",
                "--prompt=Resume session> ",
            ],
            input=fzf_input,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError:
        console.print("[red]fzf not found. Install with: brew install fzf[/red]")
        return None
    except subprocess.CalledProcessError:
        return None  # User cancelled fzf selection

    selected = proc.stdout.strip()
    if not selected:
        return None
    return sessions[int(selected.split("\t")[0])]


def resume_session(session: Session, command: str = RESUME_COMMAND) -> int:
    """Resume a session in its project directory. Returns the child's exit code."""
    proc = subprocess.run([command, "--resume", session.id], cwd=session.cwd)
    return proc.returncode
