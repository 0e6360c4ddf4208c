"""
Result models returned by the stream reconstructor.
Serialise with ``model_dump(by_alias=True)`` to get the camelCase wire shape.
"""

from __future__ import annotations

from typing import Any, Optional

from langchain_core.messages import AIMessage
from pydantic import BaseModel, ConfigDict, Field

from langchain_sse_replay._providers import Provider


class ParseError(BaseModel):
    """
    One problem found while reading a transcript.
    ``line`` is 1-based and is None only for errors that concern the whole stream.
    """
    model_config = ConfigDict(frozen=True)
    line: Optional[int] = None
    message: str
    raw: Optional[str] = None


class StreamMetadata(BaseModel):
    """Stream-level facts aggregated over every decoded chunk."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    provider: Provider
    model: Optional[str] = None
    id: Optional[str] = None
    chunk_count: int = Field(default=0, ge=0, alias="chunkCount")
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")


class ParseResult(BaseModel):
    """
    Reconstructed message plus whatever went wrong while building it.
    ``metadata`` is None when no chunk decoded; ``errors`` is None when nothing went wrong.
    """
    model_config = ConfigDict(frozen=True)
    content: str = ""
    metadata: Optional[StreamMetadata] = None
    errors: Optional[tuple[ParseError, ...]] = None

    @property
    def ok(self) -> bool:
        """True when the transcript produced no errors."""
        return self.errors is None

    def to_message(self) -> AIMessage:
        """
        Wrap the reconstructed text in a LangChain ``AIMessage``.

        Returns:
            An AIMessage whose ``response_metadata`` carries the stream metadata
            keys that are set (``provider``, ``model_name``, ``id``,
            ``finish_reason``, ``chunk_count``).
        """
        response_metadata: dict[str, Any] = {}
        md = self.metadata
        if md is not None:
            response_metadata["provider"] = md.provider.value
            response_metadata["chunk_count"] = md.chunk_count
            if md.model is not None:
                response_metadata["model_name"] = md.model
            if md.id is not None:
                response_metadata["id"] = md.id
            if md.finish_reason is not None:
                response_metadata["finish_reason"] = md.finish_reason

        return AIMessage(content=self.content, response_metadata=response_metadata)
