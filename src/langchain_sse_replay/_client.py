from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from langchain_sse_replay._errors import TranscriptHTTPError

ENV_HTTP_DEBUG = "SSE_REPLAY_HTTP_DEBUG"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout_s: float = 30.0
    api_key: str | None = None


def _parse_error_response(
    status_code: int,
    body_text: str,
    content_type: str,
    url: str | None = None,
) -> TranscriptHTTPError:
    """
    Build a TranscriptHTTPError from an error response.

    Si el body no es JSON o no trae un mensaje reconocible,
    el mensaje es el texto del body (o "HTTP error" si viene vacío).
    """
    message = body_text.strip() if body_text and body_text.strip() else "HTTP error"

    if "application/json" not in content_type.lower():
        return TranscriptHTTPError(status_code=status_code, message=message, body=body_text, url=url)

    try:
        data = json.loads(body_text) if body_text else {}
    except (json.JSONDecodeError, ValueError):
        return TranscriptHTTPError(status_code=status_code, message=message, body=body_text, url=url)

    if isinstance(data, dict):
        error_obj = data.get("error")
        if isinstance(error_obj, dict):
            msg = error_obj.get("message")
        elif isinstance(error_obj, str):
            msg = error_obj
        else:
            msg = data.get("message")
        if isinstance(msg, str) and msg.strip():
            message = msg.strip()

    return TranscriptHTTPError(status_code=status_code, message=message, body=body_text, url=url)


class TranscriptHttpClient:
    """
    Thin HTTPX wrapper used to download recorded transcripts:
    - plain GET of a text body (sync / async)
    - structured errors on non-2xx
    - optional request/response debug logging
    """

    def __init__(self, *, config: HttpConfig | None = None) -> None:
        self._config = config or HttpConfig()
        self._debug_http = os.getenv(ENV_HTTP_DEBUG, "").lower() in {"1", "true", "yes", "on"}

        def _redact_headers(headers: dict[str, Any]) -> dict[str, Any]:
            out = dict(headers)
            for k in ("authorization", "Authorization"):
                if k in out:
                    out[k] = "Bearer ***REDACTED***"
            return out

        def _log_request(request: httpx.Request) -> None:
            if not self._debug_http:
                return
            logger.warning("HTTPX REQUEST %s %s", request.method, request.url)
            logger.warning("HTTPX REQUEST headers=%s", _redact_headers(dict(request.headers)))

        def _log_response(response: httpx.Response) -> None:
            if not self._debug_http:
                return
            req = response.request
            logger.warning("HTTPX RESPONSE %s %s -> %s", req.method, req.url, response.status_code)
            logger.warning("HTTPX RESPONSE headers=%s", dict(response.headers))

        async def _log_request_async(request: httpx.Request) -> None:
            _log_request(request)

        async def _log_response_async(response: httpx.Response) -> None:
            _log_response(response)

        EventHooksDict = dict[str, list[Callable[..., Any]]]

        hooks_sync: EventHooksDict = {"request": [_log_request], "response": [_log_response]}
        hooks_async: EventHooksDict = {"request": [_log_request_async], "response": [_log_response_async]}

        timeout = httpx.Timeout(self._config.timeout_s)
        self._client = httpx.Client(timeout=timeout, event_hooks=hooks_sync, follow_redirects=True)
        self._aclient: httpx.AsyncClient | None = None
        self._timeout = timeout
        self._hooks_async = hooks_async

    def _async_client(self) -> httpx.AsyncClient:
        # Se crea en el primer uso async; el camino sync nunca abre uno.
        if self._aclient is None:
            self._aclient = httpx.AsyncClient(
                timeout=self._timeout, event_hooks=self._hooks_async, follow_redirects=True
            )
        return self._aclient

    def close(self) -> None:
        self._client.close()

    async def aclose(self) -> None:
        if self._aclient is not None:
            await self._aclient.aclose()
            self._aclient = None

    def __enter__(self) -> TranscriptHttpClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> TranscriptHttpClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
        self.close()

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Accept": "text/event-stream, text/plain;q=0.9, */*;q=0.8"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    @staticmethod
    def raise_for_status(resp: httpx.Response) -> None:
        """Check the status and raise a structured TranscriptHTTPError."""
        if 200 <= resp.status_code < 300:
            return

        body_text: str | None = None
        try:
            body_text = resp.text
        except Exception:
            body_text = None

        url: str | None = None
        try:
            url = str(resp.request.url)
        except RuntimeError:
            url = None

        raise _parse_error_response(
            status_code=resp.status_code,
            body_text=body_text or "",
            content_type=resp.headers.get("content-type", ""),
            url=url,
        )

    def fetch_text(self, url: str) -> str:
        resp = self._client.get(url, headers=self._headers())
        self.raise_for_status(resp)
        return resp.text

    async def afetch_text(self, url: str) -> str:
        resp = await self._async_client().get(url, headers=self._headers())
        self.raise_for_status(resp)
        return resp.text
