"""cc-sessions: list, resume and auto-title Claude Code sessions."""

__version__ = "0.1.0"
