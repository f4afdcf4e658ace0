"""
Objectives: collectible items the app awards points for (`items` table).
"""

from __future__ import annotations

from typing import Any

from core import where
from core.errors import NotFoundError, ValidationError
from core.pagination import ListQuery, paginate
from core.records import RecordClient

from . import schemas

TABLE = "items"


def build_where(query: ListQuery) -> str:
    item_type = query.filters.get("type")
    return where.all_of(
        where.like("name", query.search) if query.search else "",
        where.eq("type", item_type) if item_type else "",
    )


async def list_objectives(records: RecordClient, query: ListQuery) -> dict[str, Any]:
    return await paginate(records, TABLE, query, where=build_where(query))


async def get_objective(records: RecordClient, objective_id: int) -> dict[str, Any]:
    item = await records.get_by_id(TABLE, objective_id)
    if item is None:
        raise NotFoundError("Objective not found")
    return item


async def create_objective(records: RecordClient, payload: schemas.ObjectiveIn) -> dict[str, Any]:
    name = (payload.name or "").strip()
    if not name or not payload.type:
        raise ValidationError("Name and type are required")
    data = {
        "name": name,
        "type": payload.type,
        "description": payload.description or "",
        "points": payload.points or 0,
        "image": payload.image or "",
    }
    return await records.create(TABLE, data)


async def update_objective(
    records: RecordClient, objective_id: int, payload: schemas.ObjectiveIn
) -> dict[str, Any]:
    data = payload.model_dump(exclude_unset=True)
    if isinstance(data.get("name"), str):
        data["name"] = data["name"].strip()
    return await records.update(TABLE, objective_id, data)


async def delete_objective(records: RecordClient, objective_id: int) -> None:
    await records.delete(TABLE, objective_id)
