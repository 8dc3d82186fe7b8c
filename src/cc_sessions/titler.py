"""Auto-title Claude Code sessions using a local LLM.

Walks every project's sessions-index.json, picks the sessions that are
untitled (or were modified after they were titled), asks the model for a
short title and writes the updated index back in one go.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import httpx
from rich.console import Console
from rich.markup import escape

from cc_sessions.config import INDEX_FILENAME, TitlerConfig
from cc_sessions.eligibility import needs_retitling, should_process_session
from cc_sessions.excerpt import (
    estimate_tokens,
    extract_conversation,
    load_session_messages,
    prepare_conversation_text,
)
from cc_sessions.llm import generate_title
from cc_sessions.models import SessionIndex, SessionIndexEntry, TitleResult

console = Console()
err_console = Console(stderr=True)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a Z suffix."""
    now = datetime.now(tz=timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def find_session_indexes(projects_dir: Path) -> list[Path]:
    """Find the sessions-index.json of every project directory.

    Projects without an index are skipped. An unreadable projects dir is
    reported and yields no files.
    """
    try:
        project_dirs = sorted(p for p in projects_dir.iterdir() if p.is_dir())
    except OSError as e:
        err_console.print(f"[red]Error reading projects dir: {escape(str(e))}[/red]")
        return []

    return [p / INDEX_FILENAME for p in project_dirs if (p / INDEX_FILENAME).is_file()]


def load_index(index_path: Path) -> SessionIndex:
    """Read and parse an index file. Parse errors propagate to the caller."""
    with open(index_path, encoding="utf-8") as f:
        return SessionIndex.from_dict(json.load(f))


def save_index(index_path: Path, index: SessionIndex) -> None:
    """Rewrite the whole index file."""
    with open(index_path, "w", encoding="utf-8") as f:
        json.dump(index.to_dict(), f, indent=2, ensure_ascii=False)


def process_session(
    entry: SessionIndexEntry,
    config: TitlerConfig,
    dry_run: bool = False,
    client: httpx.Client | None = None,
) -> TitleResult | None:
    """Generate a title for one eligible session.

    Returns None when the session has no usable conversation, in dry-run
    mode, or when the model produced nothing.
    """
    messages = load_session_messages(entry.full_path)
    conversation = extract_conversation(messages)
    if not conversation:
        return None

    is_retitle = needs_retitling(entry)
    combined = prepare_conversation_text(conversation, config.max_chars, config.num_messages)
    action = "Retitling" if is_retitle else "Processing"
    console.print(
        f"  {action} {entry.session_id[:8]}... "
        f"({len(conversation)} msgs, ~{estimate_tokens(combined)} tokens)"
    )

    if dry_run:
        dry_action = "retitle" if is_retitle else "title"
        console.print(
            f"  [yellow]\\[DRY RUN] Would {dry_action}:[/yellow] {escape(entry.first_prompt[:50])}..."
        )
        return None

    title = generate_title(combined, config, client=client)
    if not title:
        console.print("  [yellow]Failed to generate title[/yellow]")
        return None

    color = "cyan" if is_retitle else "green"
    console.print(f"  [{color}]Title:[/{color}] {escape(title)}")
    return TitleResult(title=title, titled_at=utc_now_iso())


def process_index_file(
    index_path: Path,
    dry_run: bool = False,
    config: TitlerConfig | None = None,
    client: httpx.Client | None = None,
) -> int:
    """Title the eligible sessions of one index file.

    Returns the number of entries updated. The file is rewritten once, after
    all candidates are processed, and only if something changed.
    """
    config = config or TitlerConfig()
    console.print(f"\nProcessing: {index_path}")

    index = load_index(index_path)

    to_process = [e for e in index.entries if should_process_session(e)]
    needs_new_title = sum(1 for e in to_process if not e.custom_title)
    needs_retitle = sum(1 for e in to_process if needs_retitling(e))

    if needs_new_title > 0:
        console.print(f"Found {needs_new_title} untitled sessions")
    if needs_retitle > 0:
        console.print(f"Found {needs_retitle} sessions needing retitle (modified since titled)")
    if not to_process:
        console.print(f"No sessions need titling ({len(index.entries)} total)")

    updated_count = 0
    for entry in to_process:
        result = process_session(entry, config, dry_run=dry_run, client=client)
        if result is not None:
            entry.custom_title = result.title
            entry.titled_at = result.titled_at
            updated_count += 1

    if updated_count > 0 and not dry_run:
        save_index(index_path, index)
        console.print(f"\n[green]Saved {updated_count} titles to {index_path}[/green]")

    return updated_count


def run_once(
    dry_run: bool = False,
    config: TitlerConfig | None = None,
    client: httpx.Client | None = None,
) -> int:
    """Run one full titling pass over every project. Returns the total updated."""
    config = config or TitlerConfig()

    console.print("[bold]Claude Session Titler[/bold]")
    console.print(f"Mode: {'DRY RUN' if dry_run else 'UPDATE'}\n")

    index_files = find_session_indexes(config.projects_dir)
    console.print(f"Found {len(index_files)} project index files")

    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=config.timeout)

    total_updated = 0
    try:
        for index_path in index_files:
            try:
                total_updated += process_index_file(index_path, dry_run, config, client=client)
            except (OSError, TypeError, ValueError) as e:
                # json.JSONDecodeError is a ValueError
                err_console.print(f"[red]Failed to process {index_path}: {escape(str(e))}[/red]")
    finally:
        if own_client:
            client.close()

    console.print(f"\n[green]Done! Updated {total_updated} sessions.[/green]")
    return total_updated
