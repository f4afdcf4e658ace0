"""
Field format translation between the admin forms and the record store.

List-like fields (types, images, videos, advise) are stored as JSON array
strings but edited as comma- or newline-separated text. None of these
functions raise; malformed input falls back to an empty value.
"""

from __future__ import annotations

import json
from typing import Any


def _dump(items: list[Any]) -> str:
    return json.dumps(items, ensure_ascii=False, separators=(",", ":"))


def _split_to_array(text: Any, separator: str) -> str:
    if not text or not isinstance(text, str):
        return "[]"
    return _dump([piece.strip() for piece in text.split(separator) if piece.strip()])


def _display(item: Any) -> str:
    # Array.join text: null is empty, nested arrays join with ",".
    if item is None:
        return ""
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, float) and item.is_integer():
        return str(int(item))
    if isinstance(item, list):
        return ",".join(_display(inner) for inner in item)
    return str(item)


def _join_array(encoded: Any, separator: str) -> str:
    try:
        items = json.loads(encoded or "[]")
        if not isinstance(items, list):
            return ""
        return separator.join(_display(item) for item in items)
    except (TypeError, ValueError, RecursionError):
        return ""


def comma_to_array(text: Any) -> str:
    return _split_to_array(text, ",")


def newline_to_array(text: Any) -> str:
    return _split_to_array(text, "\n")


def array_to_comma(encoded: Any) -> str:
    return _join_array(encoded, ", ")


def array_to_newline(encoded: Any) -> str:
    return _join_array(encoded, "\n")


_MISSING = object()


def parse_json_safe(encoded: Any, fallback: Any = _MISSING) -> Any:
    """
    Parse a JSON string, returning `fallback` when it is absent or malformed.

    `fallback` defaults to a fresh empty list.
    """
    if fallback is _MISSING:
        fallback = []
    if not encoded or not isinstance(encoded, (str, bytes, bytearray)):
        return fallback
    try:
        return json.loads(encoded)
    except (ValueError, RecursionError):
        return fallback


def parse_json_list(encoded: Any) -> list[Any]:
    if isinstance(encoded, list):
        return encoded
    value = parse_json_safe(encoded, [])
    return value if isinstance(value, list) else []


def encode_json(value: Any) -> str:
    return _dump(value)
