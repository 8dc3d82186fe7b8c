"""Title generation via a local OpenAI-compatible chat completion endpoint."""

from typing import Any

import httpx
from rich.console import Console
from rich.markup import escape

from cc_sessions.config import TitlerConfig

err_console = Console(stderr=True)

TITLE_PROMPT = """Generate a concise 3-6 word title summarizing this conversation:

{conversation}

Reply with ONLY the title, no quotes or explanation. /no_think"""


def build_title_prompt(conversation: str) -> str:
    """Embed the conversation excerpt in the title prompt."""
    return TITLE_PROMPT.format(conversation=conversation)


def build_payload(conversation: str, config: TitlerConfig) -> dict[str, Any]:
    return {
        "model": config.model_id,
        "messages": [{"role": "user", "content": build_title_prompt(conversation)}],
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }


def extract_title(data: Any) -> str | None:
    """Pull the answer out of a chat completion response.

    Qwen3 sometimes puts the answer in reasoning_content instead of content.
    """
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None

    for key in ("content", "reasoning_content"):
        value = message.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def generate_title(
    conversation: str,
    config: TitlerConfig,
    client: httpx.Client | None = None,
) -> str | None:
    """Ask the model for a title. Returns None on any failure; never retries."""
    if client is None:
        with httpx.Client(timeout=config.timeout) as own_client:
            return _request_title(own_client, conversation, config)
    return _request_title(client, conversation, config)


def _request_title(client: httpx.Client, conversation: str, config: TitlerConfig) -> str | None:
    try:
        response = client.post(config.endpoint_url, json=build_payload(conversation, config))
    except httpx.HTTPError as e:
        err_console.print(f"[red]Failed to call model endpoint: {escape(str(e))}[/red]")
        return None

    if not response.is_success:
        err_console.print(f"[red]Model API error: {response.status_code}[/red]")
        return None

    try:
        data = response.json()
    except ValueError as e:
        err_console.print(f"[red]Invalid response from model endpoint: {escape(str(e))}[/red]")
        return None

    return extract_title(data)
