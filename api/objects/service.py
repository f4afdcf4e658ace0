"""
Objects recognised by the app's camera feature (`objects` table).
"""

from __future__ import annotations

from typing import Any

from core import where
from core.errors import NotFoundError, ValidationError
from core.pagination import ListQuery, paginate
from core.records import RecordClient

from . import schemas

TABLE = "objects"

SEARCH_FIELDS = ("title", "content")


async def list_objects(records: RecordClient, query: ListQuery) -> dict[str, Any]:
    return await paginate(records, TABLE, query, where=where.search_any(SEARCH_FIELDS, query.search))


async def get_object(records: RecordClient, object_id: int) -> dict[str, Any]:
    obj = await records.get_by_id(TABLE, object_id)
    if obj is None:
        raise NotFoundError("Object not found")
    return obj


async def create_object(records: RecordClient, payload: schemas.ObjectIn) -> dict[str, Any]:
    title = (payload.title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    return await records.create(TABLE, {"title": title, "content": payload.content or ""})


async def update_object(records: RecordClient, object_id: int, payload: schemas.ObjectIn) -> dict[str, Any]:
    data = payload.model_dump(exclude_unset=True)
    if isinstance(data.get("title"), str):
        data["title"] = data["title"].strip()
    return await records.update(TABLE, object_id, data)


async def delete_object(records: RecordClient, object_id: int) -> None:
    await records.delete(TABLE, object_id)
