from __future__ import annotations
from dataclasses import dataclass
from typing import Any


class SSEReplayError(RuntimeError):
    """Base error of the library."""


class TranscriptSourceError(SSEReplayError):
    """A transcript source (file, stdin) could not be read."""


@dataclass(slots=True)
class TranscriptHTTPError(SSEReplayError):
    """
    HTTP failure while fetching a recorded transcript.

    ``message`` is taken from a JSON error envelope when the server sends one:
    {"error": {"message": "..."}} or {"message": "..."}; otherwise it is the body text.
    """
    status_code: int
    message: str
    body: str | None = None
    url: str | None = None

    def __str__(self) -> str:
        parts = [f"TranscriptHTTPError(status_code={self.status_code}"]
        parts.append(f", message={self.message!r}")
        if self.url:
            parts.append(f", url={self.url!r}")
        if self.body:
            parts.append(f", body={len(self.body)} chars")
        parts.append(")")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Error as a dict for structured logging."""
        return {
            "status_code": self.status_code,
            "message": self.message,
            "url": self.url,
            "body": self.body,
        }

    @property
    def is_client_error(self) -> bool:
        """True for 4xx responses."""
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        """True for 5xx responses."""
        return 500 <= self.status_code < 600
