"""
User account API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.pagination import ListQuery, list_query
from core.records import RecordClient, get_records

from . import schemas, service

router = APIRouter(
    prefix="/users",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("")
async def list_users(
    query: ListQuery = Depends(list_query),
    records: RecordClient = Depends(get_records),
) -> dict:
    return {"success": True, "data": await service.list_users(records, query)}


@router.get("/{user_id}")
async def get_user(user_id: int, records: RecordClient = Depends(get_records)) -> dict:
    return {"success": True, "data": await service.get_user(records, user_id)}


@router.post("", status_code=201)
async def create_user(payload: schemas.UserIn, records: RecordClient = Depends(get_records)) -> dict:
    data = await service.create_user(records, payload)
    return {"success": True, "data": data, "message": "User created successfully"}


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    payload: schemas.UserIn,
    records: RecordClient = Depends(get_records),
) -> dict:
    data = await service.update_user(records, user_id, payload)
    return {"success": True, "data": data, "message": "User updated successfully"}


@router.delete("/{user_id}")
async def delete_user(user_id: int, records: RecordClient = Depends(get_records)) -> dict:
    await service.delete_user(records, user_id)
    return {"success": True, "message": "User deleted successfully"}
