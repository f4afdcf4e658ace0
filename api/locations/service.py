"""
Locations: list/detail with display fields, rating sort, and form writes.
"""

from __future__ import annotations

import math
from typing import Any

from core import facets, transform, where
from core.errors import NotFoundError
from core.pagination import ListQuery, paginate
from core.ratings import RATING_VIRTUAL_FIELDS, average_rating, review_count
from core.records import RecordClient

from . import schemas

TABLE = "locations"


def _as_float(value: Any) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    # nan and inf cannot be sent as JSON.
    return result if math.isfinite(result) else 0.0


def decorate(location: dict[str, Any]) -> dict[str, Any]:
    return {
        **location,
        "types_display": transform.array_to_comma(location.get("types")),
        "images_display": transform.array_to_newline(location.get("images")),
        "videos_display": transform.array_to_newline(location.get("videos")),
        "advise_display": transform.array_to_newline(location.get("advise")),
        "calculated_rating": average_rating(location.get("reviews")),
        "review_count": review_count(location.get("reviews")),
    }


def build_where(query: ListQuery) -> str:
    has_marker = query.filters.get("hasMarker")
    return where.all_of(
        where.like("name", query.search) if query.search else "",
        where.like("types", query.filters["types"]) if query.filters.get("types") else "",
        where.eq("marker", has_marker) if has_marker is not None else "",
    )


def to_record(payload: schemas.LocationIn) -> dict[str, Any]:
    return {
        "name": payload.name,
        "types": transform.comma_to_array(payload.types),
        "description": payload.description or "",
        "long_description": payload.long_description or "",
        "address": payload.address or "",
        "lat": _as_float(payload.lat),
        "long": _as_float(payload.long),
        "phone": payload.phone or "",
        "website": payload.website or "",
        "opening_hours": payload.opening_hours or "",
        "images": transform.newline_to_array(payload.images),
        "videos": transform.newline_to_array(payload.videos),
        "advise": transform.newline_to_array(payload.advise),
        # Shown on the map unless explicitly hidden.
        "marker": payload.marker is not False,
    }


async def list_locations(records: RecordClient, query: ListQuery) -> dict[str, Any]:
    return await paginate(
        records,
        TABLE,
        query,
        where=build_where(query),
        decorate=decorate,
        virtual_fields=RATING_VIRTUAL_FIELDS,
    )


async def get_location(records: RecordClient, location_id: int) -> dict[str, Any]:
    location = await records.get_by_id(TABLE, location_id)
    if location is None:
        raise NotFoundError("Location not found")
    return decorate(location)


async def location_types(records: RecordClient) -> list[str]:
    return await facets.distinct_types(records, TABLE)


async def create_location(records: RecordClient, payload: schemas.LocationIn) -> dict[str, Any]:
    record = {**to_record(payload), "reviews": "[]"}
    return await records.create(TABLE, record)


async def update_location(
    records: RecordClient, location_id: int, payload: schemas.LocationIn
) -> dict[str, Any]:
    return await records.update(TABLE, location_id, to_record(payload))


async def set_marker(records: RecordClient, location_id: int, marker: bool) -> dict[str, Any]:
    return await records.update(TABLE, location_id, {"marker": marker})


async def delete_location(records: RecordClient, location_id: int) -> None:
    await records.delete(TABLE, location_id)
