"""Build a bounded conversation excerpt from a raw session log."""

from pathlib import Path

from cc_sessions.models import Message

MAX_USER_CHARS = 300
MAX_ASSISTANT_CHARS = 200


def load_session_messages(path: Path | str) -> list[Message]:
    """Load every line of a JSONL session log.

    Lines that are not valid JSON objects become unparseable records (the log
    may be written concurrently). A missing or unreadable file yields [].
    """
    try:
        # A partially written trailing character decodes to U+FFFD
        content = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return []

    return [Message.from_line(line) for line in content.strip().split("\n")]


def _first_text_block(blocks: list) -> str | None:
    for block in blocks:
        if not isinstance(block, dict) or block.get("type") != "text":
            continue
        text = block.get("text")
        if isinstance(text, str) and text.strip():
            return text
    return None


def extract_conversation(messages: list[Message]) -> list[str]:
    """Turn messages into "User: ..." / "Assistant: ..." lines, in order.

    Only user messages with string content and the first non-empty text block
    of each assistant message contribute. Summaries, snapshots, tool blocks
    and unparseable lines are skipped.
    """
    conversation: list[str] = []

    for msg in messages:
        content = msg.content

        if msg.type == "user":
            if isinstance(content, str) and content.strip():
                conversation.append(f"User: {content[:MAX_USER_CHARS]}")

        elif msg.type == "assistant":
            if isinstance(content, list):
                text = _first_text_block(content)
                if text is not None:
                    conversation.append(f"Assistant: {text[:MAX_ASSISTANT_CHARS]}")

    return conversation


def prepare_conversation_text(conversation: list[str], max_chars: int, num_messages: int) -> str:
    """Join the last num_messages lines, keeping at most max_chars of the most recent text."""
    recent = conversation[-num_messages:] if num_messages > 0 else []
    combined = "\n".join(recent)

    # Truncate from the start if over limit (keep most recent)
    if len(combined) > max_chars:
        keep = max(max_chars - 3, 0)
        combined = ("..." + combined[len(combined) - keep:])[: max(max_chars, 0)]

    return combined


def estimate_tokens(text: str) -> int:
    """Estimate token count (rough approximation)."""
    return len(text) // 4
