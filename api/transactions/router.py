"""
Transaction API endpoints (read-only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.pagination import ListQuery, list_query
from core.records import RecordClient, get_records

from . import service

router = APIRouter(
    prefix="/transactions",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("")
async def list_transactions(
    query: ListQuery = Depends(list_query),
    status: str = Query("", max_length=50),
    records: RecordClient = Depends(get_records),
) -> dict:
    query = query.with_filters(status=status.strip())
    return {"success": True, "data": await service.list_transactions(records, query)}


@router.get("/stats")
async def transaction_stats(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.transaction_stats(records)}
