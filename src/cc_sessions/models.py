"""Data models for cc-sessions."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

_STRING_KEYS = (
    "sessionId",
    "firstPrompt",
    "projectPath",
    "fullPath",
    "created",
    "modified",
    "customTitle",
    "titledAt",
)


@dataclass
class SessionIndexEntry:
    """Metadata for one session, as stored in sessions-index.json."""

    session_id: str
    first_prompt: str = ""
    project_path: str = ""
    full_path: str = ""
    created: str = ""
    modified: str = ""
    message_count: int = 0
    custom_title: str | None = None
    titled_at: str | None = None  # ISO timestamp of when the titler produced custom_title
    # Original on-disk mapping, so unknown keys survive a rewrite in place
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "SessionIndexEntry":
        if not isinstance(data, dict):
            raise ValueError(f"Index entry must be an object, got {type(data).__name__}")

        for key in _STRING_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Index entry field {key!r} must be a string, got {value!r}")
        message_count = data.get("messageCount")
        if message_count is not None and (
            isinstance(message_count, bool) or not isinstance(message_count, (int, float))
        ):
            raise ValueError(f"Index entry field 'messageCount' must be a number, got {message_count!r}")

        return cls(
            session_id=data.get("sessionId") or "",
            first_prompt=data.get("firstPrompt") or "",
            project_path=data.get("projectPath") or "",
            full_path=data.get("fullPath") or "",
            created=data.get("created") or "",
            modified=data.get("modified") or "",
            message_count=message_count or 0,
            custom_title=data.get("customTitle"),
            titled_at=data.get("titledAt"),
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        # Updating existing keys keeps their position; new keys are appended
        data = dict(self.raw)
        fields = {
            "sessionId": self.session_id,
            "firstPrompt": self.first_prompt,
            "projectPath": self.project_path,
            "fullPath": self.full_path,
            "created": self.created,
            "modified": self.modified,
            "messageCount": self.message_count,
        }
        for key, value in fields.items():
            # Keys missing on disk are not invented from defaults
            if key in data or value:
                data[key] = value
        for key, value in (("customTitle", self.custom_title), ("titledAt", self.titled_at)):
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        return data


@dataclass
class SessionIndex:
    """A per-project sessions-index.json file."""

    version: int
    entries: list[SessionIndexEntry] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "SessionIndex":
        if not isinstance(data, dict):
            raise ValueError("Session index must be a JSON object")
        entries = data.get("entries", [])
        if not isinstance(entries, list):
            raise ValueError("Session index 'entries' must be a list")
        return cls(
            version=data.get("version", 1),
            entries=[SessionIndexEntry.from_dict(e) for e in entries],
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.raw)
        data["version"] = self.version
        data["entries"] = [e.to_dict() for e in self.entries]
        return data


@dataclass
class Message:
    """A single line of a raw session log (JSONL).

    Lines that fail to parse are kept as unparseable records with type
    "unknown" so the position of every line is preserved.
    """

    type: str
    message: dict[str, Any] | None = None
    parsed: bool = True

    @classmethod
    def from_line(cls, line: str) -> "Message":
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            return cls.unparseable()

        if not isinstance(record, dict):
            return cls.unparseable()

        message = record.get("message")
        return cls(
            type=str(record.get("type", "unknown")),
            message=message if isinstance(message, dict) else None,
        )

    @classmethod
    def unparseable(cls) -> "Message":
        return cls(type="unknown", parsed=False)

    @property
    def content(self) -> Any:
        """The message body: a string or a list of content blocks."""
        if self.message is None:
            return None
        return self.message.get("content")


@dataclass
class Session:
    """A session as shown in the picker."""

    id: str
    title: str  # custom_title if available, otherwise first_prompt
    first_message: str
    project: str  # display path (projectPath field)
    cwd: str  # resume directory, derived from the project folder name
    timestamp: datetime
    message_count: int


@dataclass
class SelectOption:
    """One picker row."""

    name: str
    description: str


@dataclass
class TitleResult:
    """A freshly generated title for a session."""

    title: str
    titled_at: str
