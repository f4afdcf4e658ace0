"""
Auth business logic.

There is a single admin account, configured through ADMIN_EMAIL and
ADMIN_PASSWORD_HASH. Sessions are not persisted; logout is client-side.
"""

from __future__ import annotations

import logging

from core.errors import UnauthorizedError, ValidationError

from . import schemas, security

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
    email = normalize_email(payload.email)
    if not email or not payload.password:
        raise ValidationError("Email and password are required")

    is_valid = email == normalize_email(security.admin_email()) and security.verify_password(
        payload.password, security.admin_password_hash()
    )
    if not is_valid:
        logger.info("login_rejected email=%s", email)
        raise UnauthorizedError("Invalid credentials")

    token = security.build_access_token(email=email, role=ADMIN_ROLE)
    return schemas.LoginResponse(
        token=token,
        user=schemas.UserResponse(email=email, role=ADMIN_ROLE),
    )


def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise UnauthorizedError(str(exc)) from exc

    email = str(payload.get("email") or "").strip()
    if not email:
        raise UnauthorizedError("Access token has no email")
    return {"email": email, "role": str(payload.get("role") or "")}
