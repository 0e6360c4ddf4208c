"""
Stream reconstructor: turns a raw SSE transcript back into the message it streamed.

The whole pass is synchronous and pure. Problems are collected as ParseError
records and returned with the best reconstruction available; nothing is raised.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from langchain_sse_replay._client import TranscriptHttpClient
from langchain_sse_replay._config import DEFAULT_CONFIG, ReplayConfig
from langchain_sse_replay._json import try_parse_json
from langchain_sse_replay._metadata import aggregate_metadata
from langchain_sse_replay._providers import Provider, detect_provider, extract_content
from langchain_sse_replay._sse import is_discarded, iter_data_segments
from langchain_sse_replay.models import ParseError, ParseResult

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "No input provided"
NO_DATA_MESSAGE = "No valid SSE data found"
BOM = "\ufeff"


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


def parse_sse_stream(raw_input: Any, config: ReplayConfig | None = None) -> ParseResult:
    """
    Reconstruct the message carried by an SSE transcript.

    Args:
        raw_input: The transcript text. Anything that is not a non-empty ``str``
            is reported as missing input.
        config: Optional settings; only ``error_preview_chars`` is used here.

    Returns:
        A ParseResult with the concatenated content, the stream metadata (None when
        nothing decoded) and the errors found (None when there were none).
    """
    cfg = config or DEFAULT_CONFIG

    if not isinstance(raw_input, str) or not raw_input:
        return ParseResult(errors=(ParseError(message=NO_INPUT_MESSAGE),))

    chunks: list[Any] = []
    errors: list[ParseError] = []
    provider: Provider | None = None

    # Un BOM inicial no es parte de la primera línea.
    text_input = raw_input.removeprefix(BOM)

    for line_no, line in enumerate(text_input.split("\n"), start=1):
        if not line.strip():
            continue

        for segment in iter_data_segments(line):
            if is_discarded(segment):
                continue

            text = segment.strip()
            ok, chunk = try_parse_json(text)
            if ok:
                chunks.append(chunk)
                if provider is None:
                    provider = detect_provider(chunk)
                    logger.debug("Detected provider %s at line %d", provider, line_no)
            elif text.startswith("{"):
                errors.append(
                    ParseError(
                        line=line_no,
                        message=f"Invalid JSON - {_truncate(text, cfg.error_preview_chars)}",
                        raw=text,
                    )
                )
            else:
                logger.debug("Ignoring non-JSON segment at line %d: %.40r", line_no, text)

    if not chunks:
        if not errors:
            errors.append(ParseError(message=NO_DATA_MESSAGE))
        return ParseResult(errors=tuple(errors))

    stream_provider = provider or Provider.UNKNOWN
    content = "".join(extract_content(chunk, stream_provider) for chunk in chunks)
    metadata = aggregate_metadata(chunks, stream_provider)

    return ParseResult(
        content=content,
        metadata=metadata,
        errors=tuple(errors) or None,
    )


def parse_sse_response(response: httpx.Response, config: ReplayConfig | None = None) -> ParseResult:
    """
    Reconstruct the body of an already received ``httpx.Response``.

    Raises:
        TranscriptHTTPError: If the response status is not 2xx.
    """
    TranscriptHttpClient.raise_for_status(response)
    response.read()
    return parse_sse_stream(response.text, config)
