"""
Builders for the record store's `where` filter expressions.

    (name,like,%hoi an%)~and((status,eq,PAID)~or(status,eq,success))
"""

from __future__ import annotations

from typing import Any


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def like(field: str, value: Any) -> str:
    return f"({field},like,%{_render(value)}%)"


def eq(field: str, value: Any) -> str:
    return f"({field},eq,{_render(value)})"


def any_of(*conditions: str) -> str:
    parts = [c for c in conditions if c]
    if len(parts) > 1:
        return "(" + "~or".join(parts) + ")"
    return parts[0] if parts else ""


def all_of(*conditions: str) -> str:
    return "~and".join(c for c in conditions if c)


def search_any(fields: list[str] | tuple[str, ...], text: str) -> str:
    """
    Substring match of `text` against any of `fields`; "" when text is blank.
    """
    text = (text or "").strip()
    if not text:
        return ""
    return any_of(*(like(field, text) for field in fields))
