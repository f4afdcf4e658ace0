"""
Location API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.pagination import ListQuery, list_query, optional_bool
from core.records import RecordClient, get_records

from . import schemas, service

router = APIRouter(
    prefix="/locations",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("")
async def list_locations(
    query: ListQuery = Depends(list_query),
    types: str = Query("", max_length=200),
    has_marker: str = Query("", alias="hasMarker"),
    records: RecordClient = Depends(get_records),
) -> dict:
    query = query.with_filters(types=types.strip(), hasMarker=optional_bool(has_marker))
    return {"success": True, "data": await service.list_locations(records, query)}


@router.get("/types")
async def list_location_types(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.location_types(records)}


@router.get("/{location_id}")
async def get_location(location_id: int, records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.get_location(records, location_id)}


@router.post("", status_code=201)
async def create_location(
    payload: schemas.LocationIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    return {"success": True, "data": await service.create_location(records, payload)}


@router.put("/{location_id}")
async def update_location(
    location_id: int,
    payload: schemas.LocationIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    return {"success": True, "data": await service.update_location(records, location_id, payload)}


@router.patch("/{location_id}/marker")
async def toggle_marker(
    location_id: int,
    payload: schemas.MarkerIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    return {"success": True, "data": await service.set_marker(records, location_id, payload.marker)}


@router.delete("/{location_id}")
async def delete_location(location_id: int, records: RecordClient = Depends(get_records)) -> dict:
    await service.delete_location(records, location_id)
    return {"success": True, "message": "Location deleted successfully"}
