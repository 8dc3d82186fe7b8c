"""Configuration for cc-sessions."""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Claude Code sessions location
PROJECTS_DIR = Path.home() / ".claude" / "projects"
INDEX_FILENAME = "sessions-index.json"

# Local OpenAI-compatible endpoint (llama.cpp server by default)
DEFAULT_ENDPOINT_URL = "http://localhost:8090/v1/chat/completions"
DEFAULT_MODEL_ID = "Qwen3-4B-Q4_K_M.gguf"
DEFAULT_TIMEOUT = 30.0


def projects_dir_from_env() -> Path:
    """The projects root, overridable with CC_SESSIONS_PROJECTS_DIR."""
    override = os.getenv("CC_SESSIONS_PROJECTS_DIR")
    return Path(override).expanduser() if override else PROJECTS_DIR


def _default_projects_dir() -> Path:
    return PROJECTS_DIR


@dataclass(frozen=True)
class TitlerConfig:
    """Settings passed explicitly to every titler component."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    model_id: str = DEFAULT_MODEL_ID
    max_chars: int = 4000  # ~1000 tokens
    num_messages: int = 10  # last N conversation lines sent to the model
    max_tokens: int = 50
    temperature: float = 0.5
    projects_dir: Path = field(default_factory=_default_projects_dir)
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "TitlerConfig":
        """Build a config, letting CC_SESSIONS_* environment variables override defaults."""
        timeout = os.getenv("CC_SESSIONS_LLM_TIMEOUT")
        return cls(
            endpoint_url=os.getenv("CC_SESSIONS_LLM_URL") or DEFAULT_ENDPOINT_URL,
            model_id=os.getenv("CC_SESSIONS_LLM_MODEL") or DEFAULT_MODEL_ID,
            projects_dir=projects_dir_from_env(),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        )
