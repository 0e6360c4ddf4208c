from __future__ import annotations

from typing import Any, Sequence

from langchain_sse_replay._providers import Provider, get_path
from langchain_sse_replay.models import StreamMetadata


def _first_string(chunk: dict[str, Any], key: str) -> str | None:
    # Igual que `data.model || data.message?.model`: se ignoran vacíos y no-strings.
    for value in (chunk.get(key), get_path(chunk, ("message", key))):
        if isinstance(value, str) and value:
            return value
    return None


def _non_empty_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def aggregate_metadata(chunks: Sequence[Any], provider: Provider) -> StreamMetadata:
    """
    Derive stream metadata from every decoded chunk, in arrival order.

    ``model`` and ``id`` keep the first value seen. ``finish_reason`` keeps the last
    end-of-stream signal of the provider, in arrival order: ``choices[0].finish_reason``
    for OpenAI; ``"stop"`` on ``message_stop`` or ``delta.stop_reason`` for Anthropic.
    Chunks that are not JSON objects are counted but contribute nothing else.
    """
    model: str | None = None
    stream_id: str | None = None
    finish_reason: str | None = None

    for chunk in chunks:
        if not isinstance(chunk, dict):
            continue
        if model is None:
            model = _first_string(chunk, "model")
        if stream_id is None:
            stream_id = _first_string(chunk, "id")

        if provider is Provider.OPENAI:
            finish_reason = _non_empty_str(get_path(chunk, ("choices", 0, "finish_reason"))) or finish_reason

        elif provider is Provider.ANTHROPIC:
            if chunk.get("type") == "message_stop":
                finish_reason = "stop"
            finish_reason = _non_empty_str(get_path(chunk, ("delta", "stop_reason"))) or finish_reason

    return StreamMetadata(
        provider=provider,
        model=model,
        id=stream_id,
        chunk_count=len(chunks),
        finish_reason=finish_reason,
    )
