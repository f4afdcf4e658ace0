"""
Festival API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.pagination import ListQuery, list_query
from core.records import RecordClient, get_records

from . import schemas, service

router = APIRouter(
    prefix="/festivals",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("")
async def list_festivals(
    query: ListQuery = Depends(list_query),
    types: str = Query("", max_length=200),
    records: RecordClient = Depends(get_records),
) -> dict:
    query = query.with_filters(types=types.strip())
    return {"success": True, "data": await service.list_festivals(records, query)}


@router.get("/types")
async def list_festival_types(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.festival_types(records)}


@router.get("/{festival_id}")
async def get_festival(festival_id: int, records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.get_festival(records, festival_id)}


@router.post("", status_code=201)
async def create_festival(
    payload: schemas.FestivalIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    return {"success": True, "data": await service.create_festival(records, payload)}


@router.put("/{festival_id}")
async def update_festival(
    festival_id: int,
    payload: schemas.FestivalIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    return {"success": True, "data": await service.update_festival(records, festival_id, payload)}


@router.delete("/{festival_id}")
async def delete_festival(festival_id: int, records: RecordClient = Depends(get_records)) -> dict:
    await service.delete_festival(records, festival_id)
    return {"success": True, "message": "Festival deleted successfully"}
