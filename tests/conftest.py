"""Pytest fixtures for cc-sessions tests."""

import json
import tempfile
from pathlib import Path

import pytest

from cc_sessions.config import TitlerConfig
from cc_sessions.models import Message, SessionIndexEntry


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_jsonl(path: Path, records: list) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write((record if isinstance(record, str) else json.dumps(record)) + "\n")
    return path


@pytest.fixture
def conversation_records():
    """Raw log records: summary, snapshot, two exchanges (one with a tool call), a closing thanks."""
    return [
        {"type": "summary", "summary": "Previous context", "message": {"content": "Some summary"}},
        {"type": "file-history-snapshot", "snapshot": {"files": []}},
        {"type": "user", "message": {"role": "user", "content": "Can you help me with Docker?"}},
        {
            "type": "assistant",
            "message": {
                "role": "assistant",
                "content": [{"type": "text", "text": "Sure! What do you need help with?"}],
            },
        },
        {"type": "user", "message": {"role": "user", "content": "How do I run a container?"}},
        {
            "type": "assistant",
            "message": {
                "role": "assistant",
                "content": [
                    {"type": "tool_use", "name": "Bash", "input": {"command": "docker ps"}},
                    {"type": "text", "text": "Use docker run <image>"},
                ],
            },
        },
        {"type": "user", "message": {"role": "user", "content": "Thanks!"}},
    ]


@pytest.fixture
def conversation_messages(conversation_records):
    return [Message.from_line(json.dumps(r)) for r in conversation_records]


@pytest.fixture
def sample_session_jsonl(temp_dir, conversation_records):
    """Create a sample JSONL session file."""
    return write_jsonl(temp_dir / "test-session.jsonl", conversation_records)


@pytest.fixture
def make_entry():
    """Build a SessionIndexEntry that is eligible for titling unless overridden."""

    def _make(**overrides) -> SessionIndexEntry:
        data = {
            "sessionId": "abc12345-0000-0000-0000-000000000000",
            "firstPrompt": "Can you help me with Docker?",
            "projectPath": "/home/user/project",
            "fullPath": "/nonexistent/session.jsonl",
            "created": "2025-01-15T10:00:00.000Z",
            "modified": "2025-01-15T11:00:00.000Z",
            "messageCount": 5,
        }
        data.update(overrides)
        return SessionIndexEntry.from_dict({k: v for k, v in data.items() if v is not None})

    return _make


@pytest.fixture
def projects_dir(temp_dir, conversation_records):
    """A ~/.claude/projects lookalike with one titled-ready project and one empty project."""
    root = temp_dir / "projects"
    project = root / "-home-user-project"
    project.mkdir(parents=True)
    (root / "-home-user-empty").mkdir()

    log_path = write_jsonl(project / "sess-1.jsonl", conversation_records)
    index = {
        "version": 1,
        "entries": [
            {
                "sessionId": "sess-1",
                "fullPath": str(log_path),
                "fileMtime": 1736938800000,
                "firstPrompt": "Can you help me with Docker?",
                "messageCount": 7,
                "created": "2025-01-15T10:00:00.000Z",
                "modified": "2025-01-15T11:00:00.000Z",
                "gitBranch": "main",
                "projectPath": "/home/user/project",
                "isSidechain": False,
            },
            {
                "sessionId": "sess-2",
                "fullPath": str(project / "sess-2.jsonl"),
                "firstPrompt": "hi",
                "messageCount": 2,
                "created": "2025-01-14T10:00:00.000Z",
                "modified": "2025-01-14T10:05:00.000Z",
                "projectPath": "/home/user/project",
            },
            {
                "sessionId": "sess-3",
                "fullPath": str(log_path),
                "firstPrompt": "Old session",
                "messageCount": 10,
                "created": "2025-01-13T10:00:00.000Z",
                "modified": "2025-01-13T12:00:00.000Z",
                "projectPath": "/home/user/project",
                "customTitle": "Manually Named Session",
            },
        ],
        "originalPath": "/home/user/project",
    }
    (project / "sessions-index.json").write_text(json.dumps(index, indent=2), encoding="utf-8")
    return root


@pytest.fixture
def index_path(projects_dir):
    return projects_dir / "-home-user-project" / "sessions-index.json"


@pytest.fixture
def config(projects_dir):
    return TitlerConfig(
        endpoint_url="http://llm.test/v1/chat/completions",
        projects_dir=projects_dir,
    )
