"""
Bearer-token guard for the admin routes.
"""

from __future__ import annotations

from fastapi import Depends, Header

from core.errors import UnauthorizedError

from . import service


def parse_bearer(authorization: str | None) -> str:
    scheme, _, token = (authorization or "").strip().partition(" ")
    if not scheme:
        raise UnauthorizedError("Not logged in")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Expected Authorization: Bearer <token>")
    return token.strip()


def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return parse_bearer(authorization)


def get_current_user(access_token: str = Depends(get_bearer_token)) -> dict:
    return service.get_user_from_access_token(access_token)
