"""
Auth security helpers.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import re
import time
from typing import Any

import bcrypt
import jwt

from core.config import env_str


class AuthSecurityError(RuntimeError):
    pass


_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration_s(raw: str, default: int) -> int:
    match = _DURATION_RE.match(raw or "")
    if match is None:
        return default
    return int(match.group(1)) * _DURATION_UNITS[match.group(2)]


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return env_str("JWT_ALG", "HS256")


def access_token_expire_s() -> int:
    return parse_duration_s(os.environ.get("JWT_EXPIRES_IN", ""), 8 * 3600)


def admin_email() -> str:
    return env_str("ADMIN_EMAIL", "admin@travel.com")


def admin_password_hash() -> str:
    return env_str("ADMIN_PASSWORD_HASH")


def password_salt() -> str:
    return env_str("PASSWORD_SALT", "TravelApp_Secret_Salt_2025")


def now_epoch_s() -> int:
    return int(time.time())


def salted_sha256(plain_password: str) -> str:
    """
    Password digest shared with the mobile app's `accounts` table.
    """
    return hashlib.sha256(((plain_password or "") + password_salt()).encode("utf-8")).hexdigest()


def verify_password(plain_password: str, password_hash: str) -> bool:
    """
    Check against a bcrypt hash, or the legacy salted SHA-256 hex digest.
    """
    if not plain_password or not password_hash:
        return False
    if password_hash.startswith("$2"):
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
    return hmac.compare_digest(salted_sha256(plain_password), password_hash.lower())


def build_access_token(*, email: str, role: str) -> str:
    issued_at = now_epoch_s()
    payload = {
        "email": email,
        "role": role,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + access_token_expire_s(),
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token is expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload
