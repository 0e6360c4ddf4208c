"""
This module holds the settings that tune transcript reconstruction and reporting.
Values can be given directly or read from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_ERROR_PREVIEW = "SSE_REPLAY_ERROR_PREVIEW"
ENV_MAX_ERRORS = "SSE_REPLAY_MAX_ERRORS"
ENV_HTTP_TIMEOUT = "SSE_REPLAY_HTTP_TIMEOUT"
ENV_DEBUG = "SSE_REPLAY_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_number(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from None
    if value < 0:
        raise ValueError(f"Invalid value for {name}: {raw!r} (must be >= 0)")
    return value


@dataclass(frozen=True, slots=True)
class ReplayConfig:
    """
    Configuration container for transcript reconstruction.

    Attributes:
        error_preview_chars: How many characters of a malformed segment are quoted
            in its error message.
        max_displayed_errors: How many errors a text report lists before summarising.
        http_timeout_s: Timeout used when fetching a transcript over HTTP.
        debug: Enables DEBUG logging from the command line.
    """

    error_preview_chars: int = 40
    max_displayed_errors: int = 5
    http_timeout_s: float = 30.0
    debug: bool = False

    @staticmethod
    def from_env() -> ReplayConfig:
        """
        Build a ReplayConfig from ``SSE_REPLAY_*`` environment variables.

        Returns:
            A ReplayConfig where unset variables keep their defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed or is negative.
        """
        defaults = ReplayConfig()
        return ReplayConfig(
            error_preview_chars=int(_env_number(ENV_ERROR_PREVIEW, defaults.error_preview_chars, int)),
            max_displayed_errors=int(_env_number(ENV_MAX_ERRORS, defaults.max_displayed_errors, int)),
            http_timeout_s=float(_env_number(ENV_HTTP_TIMEOUT, defaults.http_timeout_s, float)),
            debug=os.getenv(ENV_DEBUG, "").lower() in _TRUTHY,
        )


DEFAULT_CONFIG = ReplayConfig()
