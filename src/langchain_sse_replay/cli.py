"""
Command line entry point: reconstruct a transcript from a file, a URL or stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

import dotenv
import httpx

from langchain_sse_replay._client import HttpConfig, TranscriptHttpClient
from langchain_sse_replay._config import ReplayConfig
from langchain_sse_replay._errors import SSEReplayError, TranscriptSourceError
from langchain_sse_replay.parser import parse_sse_stream
from langchain_sse_replay.report import render_report

EXIT_OK = 0
EXIT_PARSE_ERRORS = 1
EXIT_SOURCE_ERROR = 2


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="langchain-sse-replay",
        description="Rebuild the full message from a captured LLM SSE transcript.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default="-",
        help="Transcript file path, http(s) URL, or '-' for stdin (default).",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument("--max-errors", type=_non_negative_int, default=None, help="Errors listed before summarising.")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging.")
    return parser


def read_source(source: str, config: ReplayConfig, stdin: TextIO | None = None) -> str:
    """
    Load transcript text from ``source``.

    Raises:
        TranscriptSourceError: If a file cannot be read.
        TranscriptHTTPError: If a URL answers with a non-2xx status.
    """
    if source == "-":
        return (stdin or sys.stdin).read()

    if source.startswith(("http://", "https://")):
        with TranscriptHttpClient(config=HttpConfig(timeout_s=config.http_timeout_s)) as client:
            return client.fetch_text(source)

    try:
        return Path(source).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise TranscriptSourceError(f"Cannot read transcript {source!r}: {e}") from e


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))

    args = build_parser().parse_args(argv)
    try:
        config = ReplayConfig.from_env()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_SOURCE_ERROR

    if args.debug or config.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s:%(name)s:%(levelname)s:%(message)s")

    try:
        text = read_source(args.source, config, stdin)
    except (SSEReplayError, httpx.HTTPError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_SOURCE_ERROR

    result = parse_sse_stream(text, config)

    if args.json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    else:
        max_errors = args.max_errors if args.max_errors is not None else config.max_displayed_errors
        print(render_report(result, max_errors=max_errors))

    return EXIT_OK if result.ok else EXIT_PARSE_ERRORS
