from __future__ import annotations

from typing import Any

from core import facets, transform, where
from core.errors import NotFoundError
from core.pagination import ListQuery, paginate
from core.ratings import RATING_VIRTUAL_FIELDS, average_rating, review_count
from core.records import RecordClient

from . import schemas

TABLE = "festivals"


def _price_level(value: Any) -> int:
    try:
        return int(value) or 1
    except (TypeError, ValueError):
        return 1


def decorate(festival: dict[str, Any]) -> dict[str, Any]:
    return {
        **festival,
        "types_display": transform.array_to_comma(festival.get("types")),
        "images_display": transform.array_to_newline(festival.get("images")),
        "videos_display": transform.array_to_newline(festival.get("videos")),
        "calculated_rating": average_rating(festival.get("reviews")),
        "review_count": review_count(festival.get("reviews")),
    }


def build_where(query: ListQuery) -> str:
    return where.all_of(
        where.like("name", query.search) if query.search else "",
        where.like("types", query.filters["types"]) if query.filters.get("types") else "",
    )


def to_record(payload: schemas.FestivalIn) -> dict[str, Any]:
    return {
        "name": payload.name,
        "types": transform.comma_to_array(payload.types),
        "description": payload.description or "",
        "event_time": payload.event_time or "",
        "location": payload.location or "",
        "price_level": _price_level(payload.price_level),
        "images": transform.newline_to_array(payload.images),
        "videos": transform.newline_to_array(payload.videos),
        # Free text for festivals, unlike locations.
        "advise": payload.advise or "",
    }


async def list_festivals(records: RecordClient, query: ListQuery) -> dict[str, Any]:
    return await paginate(
        records,
        TABLE,
        query,
        where=build_where(query),
        decorate=decorate,
        virtual_fields=RATING_VIRTUAL_FIELDS,
    )


async def festival_types(records: RecordClient) -> list[str]:
    return await facets.distinct_types(records, TABLE)


async def get_festival(records: RecordClient, festival_id: int) -> dict[str, Any]:
    festival = await records.get_by_id(TABLE, festival_id)
    if festival is None:
        raise NotFoundError("Festival not found")
    return decorate(festival)


async def create_festival(records: RecordClient, payload: schemas.FestivalIn) -> dict[str, Any]:
    return await records.create(TABLE, {**to_record(payload), "reviews": "[]"})


async def update_festival(
    records: RecordClient, festival_id: int, payload: schemas.FestivalIn
) -> dict[str, Any]:
    return await records.update(TABLE, festival_id, to_record(payload))


async def delete_festival(records: RecordClient, festival_id: int) -> None:
    await records.delete(TABLE, festival_id)
