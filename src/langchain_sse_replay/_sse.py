"""
Field extractor for raw Server-Sent Events (SSE) transcripts.
Pulls every ``data:`` payload out of a single line of text.
"""

from __future__ import annotations

import re
from typing import Iterator

DATA_FIELD = "data:"
DONE_SENTINEL = "[DONE]"
CONTROL_FIELDS = ("event:", "id:", "retry:")

# Escapes first so an escaped quote never toggles the string state.
_TOKEN_RE = re.compile(r'\\.|"|data:')


def _field_boundaries(line: str) -> list[int]:
    """
    Offsets of every ``data:`` marker that starts a new field.

    Markers inside a JSON string literal belong to the payload and are skipped.
    """
    boundaries: list[int] = []
    in_string = False
    for match in _TOKEN_RE.finditer(line):
        token = match.group()
        if token == '"':
            in_string = not in_string
        elif token == DATA_FIELD and not in_string:
            boundaries.append(match.start())
    return boundaries


def iter_data_segments(line: str) -> Iterator[str]:
    """
    Yield the raw payload of every ``data:`` field found in a line.

    Args:
        line: One line of the transcript, without its newline.

    Yields:
        Segment text taken verbatim (callers are expected to strip it). A line
        with no ``data:`` field that looks like a bare JSON object is yielded
        whole.
    """
    boundaries = _field_boundaries(line)
    if not boundaries:
        if line.strip().startswith("{"):
            yield line
        return

    ends = boundaries[1:] + [len(line)]
    for start, end in zip(boundaries, ends):
        yield line[start + len(DATA_FIELD):end]


def is_discarded(segment: str) -> bool:
    """True for segments that carry no payload: blanks, ``[DONE]`` and SSE control fields."""
    text = segment.strip()
    if not text or text == DONE_SENTINEL:
        return True
    return text.startswith(CONTROL_FIELDS)
