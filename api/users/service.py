"""
App user accounts (`accounts` table). Passwords are never returned.
"""

from __future__ import annotations

from typing import Any

from auth.security import salted_sha256
from core import where
from core.errors import NotFoundError, ValidationError
from core.pagination import ListQuery, paginate
from core.records import RecordClient

from . import schemas

TABLE = "accounts"

SEARCH_FIELDS = ("fullName", "email", "userName")


def safe_user(user: dict[str, Any]) -> dict[str, Any]:
    return {
        "Id": user.get("Id"),
        "userName": user.get("userName") or "",
        "email": user.get("email"),
        "fullName": user.get("fullName") or "",
        "avatar": user.get("avatar") or "",
        "phone": user.get("phone") or "",
        "address": user.get("address") or "",
        "birthday": user.get("birthday") or "",
        "gender": user.get("gender") or "",
        "balance": user.get("balance") or 0,
        "CreatedAt": user.get("CreatedAt"),
        "UpdatedAt": user.get("UpdatedAt"),
    }


async def list_users(records: RecordClient, query: ListQuery) -> dict[str, Any]:
    return await paginate(
        records,
        TABLE,
        query,
        where=where.search_any(SEARCH_FIELDS, query.search),
        decorate=safe_user,
    )


async def get_user(records: RecordClient, user_id: int) -> dict[str, Any]:
    user = await records.get_by_id(TABLE, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return safe_user(user)


async def create_user(records: RecordClient, payload: schemas.UserIn) -> dict[str, Any]:
    if not (payload.email or "").strip() or not payload.password:
        raise ValidationError("Email and password are required")

    data = {
        "userName": payload.userName or "",
        "email": payload.email.strip(),
        "password": salted_sha256(payload.password),
        "fullName": payload.fullName or "",
        "avatar": payload.avatar or "",
        "phone": payload.phone or "",
        "address": payload.address or "",
        "birthday": payload.birthday or "",
        "gender": payload.gender or "",
        "balance": payload.balance or 0,
    }
    return await records.create(TABLE, data)


async def update_user(records: RecordClient, user_id: int, payload: schemas.UserIn) -> dict[str, Any]:
    data = payload.model_dump(exclude_unset=True)
    # An empty password keeps the current one.
    password = data.pop("password", None)
    if password:
        data["password"] = salted_sha256(password)
    if isinstance(data.get("email"), str):
        data["email"] = data["email"].strip()
    return await records.update(TABLE, user_id, data)


async def delete_user(records: RecordClient, user_id: int) -> None:
    await records.delete(TABLE, user_id)
