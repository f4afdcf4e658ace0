"""
Distinct-value readers for filter dropdowns.
"""

from __future__ import annotations

from .records import RecordClient
from .transform import parse_json_safe


async def distinct_types(records: RecordClient, table: str) -> list[str]:
    """
    Lower-cased, sorted set of every value in a table's `types` field.

    `types` is normally a JSON array string; plain comma text is accepted too.
    """
    rows = await records.fetch_superset(table, fields="Id,types")
    found: set[str] = set()
    for row in rows:
        raw = row.get("types") or ""
        parsed = raw if isinstance(raw, list) else parse_json_safe(raw, None)
        if isinstance(parsed, list):
            values = [v for v in parsed if isinstance(v, str)]
        elif parsed is None and isinstance(raw, str):
            values = raw.split(",")
        else:
            values = []
        found.update(v.strip().lower() for v in values if v.strip())
    return sorted(found)


async def names(records: RecordClient, table: str) -> list[dict]:
    rows = await records.fetch_superset(table, fields="Id,name")
    return [{"id": row.get("Id"), "name": row.get("name")} for row in rows]
