from __future__ import annotations

from pydantic import BaseModel


class UserIn(BaseModel):
    userName: str | None = None
    email: str | None = None
    password: str | None = None
    fullName: str | None = None
    avatar: str | None = None
    phone: str | None = None
    address: str | None = None
    birthday: str | None = None
    gender: str | None = None
    balance: float | None = None
