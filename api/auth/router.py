"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from . import dependencies, schemas, service

router = APIRouter(prefix="/auth")


@router.post("/login")
async def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
    return service.login(payload)


@router.post("/logout")
async def logout() -> dict:
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> dict:
    return {"success": True, "user": current_user}
