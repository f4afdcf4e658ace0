"""
Location form payloads. List-like fields arrive as display text.
"""

from __future__ import annotations

from pydantic import BaseModel


class LocationIn(BaseModel):
    name: str | None = None
    types: str | None = None
    description: str | None = None
    long_description: str | None = None
    address: str | None = None
    lat: float | str | None = None
    long: float | str | None = None
    phone: str | None = None
    website: str | None = None
    opening_hours: str | None = None
    images: str | None = None
    videos: str | None = None
    advise: str | None = None
    marker: bool | None = None


class MarkerIn(BaseModel):
    marker: bool
