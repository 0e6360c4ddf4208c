from __future__ import annotations

from langchain_sse_replay._config import ReplayConfig
from langchain_sse_replay._errors import SSEReplayError, TranscriptHTTPError, TranscriptSourceError
from langchain_sse_replay._providers import Provider
from langchain_sse_replay.models import ParseError, ParseResult, StreamMetadata
from langchain_sse_replay.parser import parse_sse_response, parse_sse_stream

__all__ = [
    "ParseError",
    "ParseResult",
    "Provider",
    "ReplayConfig",
    "SSEReplayError",
    "StreamMetadata",
    "TranscriptHTTPError",
    "TranscriptSourceError",
    "parse_sse_response",
    "parse_sse_stream",
]

__version__ = "0.1.0"
