"""
Review API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.pagination import ListQuery, list_query, optional_int
from core.records import RecordClient, get_records

from . import service

router = APIRouter(
    prefix="/reviews",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("")
async def list_reviews(
    query: ListQuery = Depends(list_query),
    location_id: str = Query("", alias="locationId"),
    festival_id: str = Query("", alias="festivalId"),
    records: RecordClient = Depends(get_records),
) -> dict:
    data = await service.list_reviews(
        records,
        page=query.page,
        limit=query.limit,
        search=query.search,
        location_id=optional_int("locationId", location_id),
        festival_id=optional_int("festivalId", festival_id),
    )
    return {"success": True, "data": data}


@router.get("/stats")
async def review_stats(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.review_stats(records)}


@router.get("/locations")
async def location_names(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.source_names(records, service.LOCATION_SOURCE)}


@router.get("/festivals")
async def festival_names(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.source_names(records, service.FESTIVAL_SOURCE)}


@router.delete("/{source}/{source_id}/{review_index}")
async def delete_review(
    source: str,
    source_id: int,
    review_index: int,
    records: RecordClient = Depends(get_records),
) -> dict:
    await service.delete_review(records, source, source_id, review_index)
    return {"success": True, "message": "Review deleted successfully"}
