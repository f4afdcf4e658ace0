"""
Dashboard API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.records import RecordClient, get_records

from . import service

router = APIRouter(
    prefix="/dashboard",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("/stats")
async def dashboard_stats(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.table_counts(records)}


@router.get("/charts")
async def dashboard_charts(records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.chart_data(records)}
