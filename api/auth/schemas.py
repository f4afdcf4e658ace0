"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=128)


class UserResponse(BaseModel):
    email: str
    role: str


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse
