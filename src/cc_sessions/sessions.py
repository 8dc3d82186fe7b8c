"""Session listing across all Claude Code projects."""

import json
import re
from datetime import datetime, timezone
from pathlib import Path

from cc_sessions.config import INDEX_FILENAME, projects_dir_from_env
from cc_sessions.eligibility import parse_timestamp
from cc_sessions.models import SelectOption, Session, SessionIndex

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def folder_name_to_path(folder_name: str) -> str:
    """Convert a project folder name back to a path.

    Folder format: -home-simon-github-project
    Returns: /home/simon/github/project
    """
    return re.sub(r"^-", "/", folder_name).replace("-", "/")


def parse_sessions_from_dir(projects_dir: Path) -> list[Session]:
    """Collect sessions from every project index, newest first.

    Projects without an index, or with an unreadable one, are skipped.
    """
    if not projects_dir.is_dir():
        return []

    sessions: list[Session] = []
    for project_dir in sorted(projects_dir.iterdir()):
        index_path = project_dir / INDEX_FILENAME
        if not index_path.is_file():
            continue

        try:
            with open(index_path, encoding="utf-8") as f:
                index = SessionIndex.from_dict(json.load(f))
        except (OSError, TypeError, ValueError):
            continue

        # The cwd for resume comes from the folder name, not projectPath
        cwd = folder_name_to_path(project_dir.name)

        for entry in index.entries:
            sessions.append(
                Session(
                    id=entry.session_id,
                    title=entry.custom_title or entry.first_prompt,
                    first_message=entry.first_prompt,
                    project=entry.project_path,
                    cwd=cwd,
                    timestamp=parse_timestamp(entry.modified) or EPOCH,
                    message_count=entry.message_count,
                )
            )

    return sorted(sessions, key=lambda s: s.timestamp, reverse=True)


def parse_history() -> list[Session]:
    """Collect sessions from ~/.claude/projects (or CC_SESSIONS_PROJECTS_DIR)."""
    return parse_sessions_from_dir(projects_dir_from_env())


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """Format a timestamp as "5m ago", "3h ago", "2d ago", or a date after a week."""
    now = now or datetime.now(tz=timezone.utc)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)

    seconds = (now - timestamp).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"

    return timestamp.astimezone().strftime("%Y-%m-%d")


def truncate(text: str, max_len: int) -> str:
    """Collapse whitespace and cut to max_len characters, ending with an ellipsis."""
    cleaned = " ".join(text.split())
    if len(cleaned) <= max_len:
        return cleaned
    return cleaned[: max_len - 1] + "…"


def shorten_home(path: str) -> str:
    return path.replace(str(Path.home()), "~")


def sessions_to_options(sessions: list[Session], now: datetime | None = None) -> list[SelectOption]:
    """Build picker rows: truncated title plus project, size and age."""
    return [
        SelectOption(
            name=truncate(s.title, 60),
            description=(
                f"{shorten_home(s.project)} · {s.message_count} msgs · "
                f"{format_relative_time(s.timestamp, now)}"
            ),
        )
        for s in sessions
    ]
