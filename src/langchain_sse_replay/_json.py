from __future__ import annotations

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    # NaN / Infinity no son JSON estricto; los navegadores los rechazan.
    raise ValueError(f"Non-standard JSON constant: {name}")


def try_parse_json(text: str) -> tuple[bool, Any]:
    """
    Decode a JSON document without raising.

    Returns:
        ``(True, value)`` on success, ``(False, None)`` otherwise.
    """
    try:
        return True, json.loads(text, parse_constant=_reject_constant)
    except Exception:
        return False, None
