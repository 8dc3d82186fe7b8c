"""Tests for the fzf picker and resume."""

import subprocess
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from cc_sessions.models import Session
from cc_sessions.picker import pick_session, resume_session


def make_sessions():
    return [
        Session(
            id=f"session-{i}",
            title=f"Title {i}",
            first_message=f"Prompt {i}",
            project="/home/user/project",
            cwd="/home/user/project",
            timestamp=datetime(2025, 1, 15, 10, i, tzinfo=timezone.utc),
            message_count=i + 3,
        )
        for i in range(3)
    ]


def test_pick_session_returns_selection():
    sessions = make_sessions()
    proc = MagicMock(stdout="1\tTitle 1\t/home/user/project · 4 msgs · 1d ago\n")

    with patch("cc_sessions.picker.subprocess.run", return_value=proc) as run:
        selected = pick_session(sessions)

    assert selected is sessions[1]
    args, kwargs = run.call_args
    assert args[0][0] == "fzf"
    assert kwargs["input"].splitlines()[0].startswith("0\tTitle 0\t")


def test_pick_session_cancelled():
    error = subprocess.CalledProcessError(130, ["fzf"])
    with patch("cc_sessions.picker.subprocess.run", side_effect=error):
        assert pick_session(make_sessions()) is None


def test_pick_session_without_fzf(capsys):
    with patch("cc_sessions.picker.subprocess.run", side_effect=FileNotFoundError("fzf")):
        assert pick_session(make_sessions()) is None
    assert "fzf not found" in capsys.readouterr().out


def test_pick_session_empty_list():
    with patch("cc_sessions.picker.subprocess.run") as run:
        assert pick_session([]) is None
    run.assert_not_called()


def test_resume_session_runs_claude_in_cwd():
    session = make_sessions()[0]

    with patch("cc_sessions.picker.subprocess.run", return_value=MagicMock(returncode=0)) as run:
        assert resume_session(session) == 0

    run.assert_called_once_with(["claude", "--resume", "session-0"], cwd="/home/user/project")


def test_resume_session_propagates_exit_code():
    with patch("cc_sessions.picker.subprocess.run", return_value=MagicMock(returncode=3)):
        assert resume_session(make_sessions()[0], command="my-claude") == 3
