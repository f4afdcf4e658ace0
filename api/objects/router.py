"""
Camera object API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.pagination import ListQuery, list_query
from core.records import RecordClient, get_records

from . import schemas, service

router = APIRouter(
    prefix="/objects",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("")
async def list_objects(
    query: ListQuery = Depends(list_query),
    records: RecordClient = Depends(get_records),
) -> dict:
    return {"success": True, "data": await service.list_objects(records, query)}


@router.get("/{object_id}")
async def get_object(object_id: int, records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.get_object(records, object_id)}


@router.post("", status_code=201)
async def create_object(payload: schemas.ObjectIn, records: RecordClient = Depends(get_records)) -> dict:
    data = await service.create_object(records, payload)
    return {"success": True, "data": data, "message": "Object created successfully"}


@router.put("/{object_id}")
async def update_object(
    object_id: int,
    payload: schemas.ObjectIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    data = await service.update_object(records, object_id, payload)
    return {"success": True, "data": data, "message": "Object updated successfully"}


@router.delete("/{object_id}")
async def delete_object(object_id: int, records: RecordClient = Depends(get_records)) -> dict:
    await service.delete_object(records, object_id)
    return {"success": True, "message": "Object deleted successfully"}
