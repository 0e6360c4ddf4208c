"""
Provider detection and per-provider content extraction for decoded SSE chunks.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Provider(str, Enum):
    """Vendor format family a streamed chunk belongs to."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


# Rutas probadas en orden cuando el formato no se reconoce.
GENERIC_CONTENT_PATHS: tuple[tuple[str | int, ...], ...] = (
    ("content",),
    ("text",),
    ("chunk",),
    ("delta", "content"),
    ("delta", "text"),
    ("message", "content"),
    ("choices", 0, "delta", "content"),
    ("choices", 0, "text"),
)


def get_path(obj: Any, path: tuple[str | int, ...]) -> Any:
    """
    Follow a key/index path through nested dicts and lists.

    Returns None as soon as an intermediate step is missing or has the wrong shape.
    """
    current = obj
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
    return current


def _first_choice(chunk: dict[str, Any]) -> dict[str, Any] | None:
    choice = get_path(chunk, ("choices", 0))
    return choice if isinstance(choice, dict) else None


def detect_provider(chunk: Any) -> Provider:
    """
    Classify a decoded chunk by its shape. First match wins.

    Args:
        chunk: Any decoded JSON value.

    Returns:
        The matching Provider, or ``Provider.UNKNOWN``.
    """
    if not isinstance(chunk, dict):
        return Provider.UNKNOWN

    if isinstance(chunk.get("choices"), list):
        return Provider.OPENAI

    chunk_type = chunk.get("type")
    if isinstance(chunk_type, str) and ("content_block" in chunk_type or "message" in chunk_type):
        return Provider.ANTHROPIC

    if isinstance(chunk.get("candidates"), list):
        return Provider.GOOGLE

    return Provider.UNKNOWN


def _extract_openai(chunk: Any) -> str:
    if not isinstance(chunk, dict):
        return ""
    choice = _first_choice(chunk)
    if choice is None:
        return ""

    # 1. Streaming: delta.content
    delta_text = get_path(choice, ("delta", "content"))
    if isinstance(delta_text, str) and delta_text:
        return delta_text

    # 2. No streaming: message.content
    message_text = get_path(choice, ("message", "content"))
    if isinstance(message_text, str) and message_text:
        return message_text

    return ""


def _extract_anthropic(chunk: Any) -> str:
    if not isinstance(chunk, dict):
        return ""
    chunk_type = chunk.get("type")

    if chunk_type == "content_block_delta":
        text = get_path(chunk, ("delta", "text"))
    elif chunk_type == "content_block_start":
        text = get_path(chunk, ("content_block", "text"))
    else:
        return ""

    return text if isinstance(text, str) else ""


def _extract_google(chunk: Any) -> str:
    parts = get_path(chunk, ("candidates", 0, "content", "parts"))
    if not isinstance(parts, list):
        return ""

    texts: list[str] = []
    for part in parts:
        text = part.get("text") if isinstance(part, dict) else None
        if isinstance(text, str):
            texts.append(text)
    return "".join(texts)


def extract_generic(chunk: Any) -> str:
    """Return the first string found along ``GENERIC_CONTENT_PATHS``, or ``""``."""
    for path in GENERIC_CONTENT_PATHS:
        value = get_path(chunk, path)
        if isinstance(value, str):
            return value
    return ""


_EXTRACTORS: dict[Provider, Callable[[Any], str]] = {
    Provider.OPENAI: _extract_openai,
    Provider.ANTHROPIC: _extract_anthropic,
    Provider.GOOGLE: _extract_google,
    Provider.UNKNOWN: extract_generic,
}


def extract_content(chunk: Any, provider: Provider) -> str:
    """
    Text fragment contributed by one chunk under the given provider's rules.

    Falls back to the generic path probe when the provider's own rules find
    nothing. Never raises: any unexpected shape counts as an empty fragment.
    """
    try:
        text = _EXTRACTORS[provider](chunk)
        if not text and provider is not Provider.UNKNOWN:
            text = extract_generic(chunk)
        return text
    except Exception:
        logger.debug("Content extraction failed for %s chunk", provider, exc_info=True)
        return ""
