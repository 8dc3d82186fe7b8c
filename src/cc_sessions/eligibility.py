"""Decide which sessions need a title or a retitle."""

from datetime import datetime, timezone

from cc_sessions.models import SessionIndexEntry

MIN_MESSAGE_COUNT = 3
PLACEHOLDER_PROMPT = "No prompt"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into a UTC-aware datetime, or None if invalid."""
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    # If naive, assume UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def needs_retitling(entry: SessionIndexEntry) -> bool:
    """Return True if a titled session was modified after its title was generated.

    Entries with a custom title but no titled_at are legacy titles of unknown
    origin and are never retitled.
    """
    if not entry.custom_title:
        return False
    if not entry.titled_at:
        return False

    modified = parse_timestamp(entry.modified)
    titled = parse_timestamp(entry.titled_at)
    if modified is None or titled is None:
        return False
    return modified > titled


def should_process_session(entry: SessionIndexEntry) -> bool:
    """Return True if the session should be sent to the titler this run."""
    # Placeholder sessions whose log never captured a real prompt
    if not entry.first_prompt.strip() or entry.first_prompt == PLACEHOLDER_PROMPT:
        return False
    if entry.message_count < MIN_MESSAGE_COUNT:
        return False

    if not entry.custom_title:
        return True
    return needs_retitling(entry)
