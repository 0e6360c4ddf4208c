"""
Plain-text presentation of a ParseResult: provider names, a metadata line and a capped error list.
"""

from __future__ import annotations

from typing import Sequence

from langchain_sse_replay._config import DEFAULT_CONFIG
from langchain_sse_replay._providers import Provider
from langchain_sse_replay.models import ParseError, ParseResult, StreamMetadata

PROVIDER_DISPLAY_NAMES: dict[str, str] = {
    Provider.OPENAI.value: "OpenAI",
    Provider.ANTHROPIC.value: "Anthropic",
    Provider.GOOGLE.value: "Google",
    Provider.UNKNOWN.value: "Unknown",
}


def format_provider(provider: Provider | str) -> str:
    """Human-readable provider name; unrecognised tags come back unchanged."""
    tag = provider.value if isinstance(provider, Provider) else provider
    return PROVIDER_DISPLAY_NAMES.get(tag, tag)


def format_metadata(metadata: StreamMetadata | None) -> str:
    if metadata is None:
        return ""

    parts = [f"Provider: {format_provider(metadata.provider)}"]
    if metadata.model:
        parts.append(f"Model: {metadata.model}")
    parts.append(f"Chunks: {metadata.chunk_count}")
    if metadata.finish_reason:
        parts.append(f"Finish: {metadata.finish_reason}")
    return " | ".join(parts)


def format_errors(errors: Sequence[ParseError] | None, limit: int | None = None) -> list[str]:
    """
    One display line per error, at most ``limit`` of them.

    Args:
        errors: Errors from a ParseResult (None or empty gives an empty list).
        limit: Maximum number of errors listed; defaults to ``max_displayed_errors``.

    Returns:
        Lines like ``"Line 3: Invalid JSON - {..."``, followed by
        ``"...and N more errors"`` when some were left out.
    """
    if not errors:
        return []

    max_errors = DEFAULT_CONFIG.max_displayed_errors if limit is None else max(limit, 0)
    lines: list[str] = []
    for err in errors[:max_errors]:
        if err.line:
            lines.append(f"Line {err.line}: {err.message}")
        else:
            lines.append(err.message)

    remaining = len(errors) - max_errors
    if remaining > 0:
        lines.append(f"...and {remaining} more error{'s' if remaining > 1 else ''}")
    return lines


def render_report(result: ParseResult, *, max_errors: int | None = None) -> str:
    """Content, then the metadata line, then the error block; empty sections are omitted."""
    sections: list[str] = []
    if result.content:
        sections.append(result.content)

    metadata_line = format_metadata(result.metadata)
    if metadata_line:
        sections.append(metadata_line)

    error_lines = format_errors(result.errors, max_errors)
    if error_lines:
        sections.append("Errors:\n" + "\n".join(f"  {ln}" for ln in error_lines))

    return "\n\n".join(sections)
