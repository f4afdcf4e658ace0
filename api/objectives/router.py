"""
Objective API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.pagination import ListQuery, list_query
from core.records import RecordClient, get_records

from . import schemas, service

router = APIRouter(
    prefix="/objectives",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("")
async def list_objectives(
    query: ListQuery = Depends(list_query),
    type: str = Query("", max_length=100),
    records: RecordClient = Depends(get_records),
) -> dict:
    query = query.with_filters(type=type.strip())
    return {"success": True, "data": await service.list_objectives(records, query)}


@router.get("/{objective_id}")
async def get_objective(objective_id: int, records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.get_objective(records, objective_id)}


@router.post("", status_code=201)
async def create_objective(
    payload: schemas.ObjectiveIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    data = await service.create_objective(records, payload)
    return {"success": True, "data": data, "message": "Objective created successfully"}


@router.put("/{objective_id}")
async def update_objective(
    objective_id: int,
    payload: schemas.ObjectiveIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    data = await service.update_objective(records, objective_id, payload)
    return {"success": True, "data": data, "message": "Objective updated successfully"}


@router.delete("/{objective_id}")
async def delete_objective(objective_id: int, records: RecordClient = Depends(get_records)) -> dict:
    await service.delete_objective(records, objective_id)
    return {"success": True, "message": "Objective deleted successfully"}
