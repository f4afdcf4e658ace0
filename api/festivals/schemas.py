"""
Festival form payloads.
"""

from __future__ import annotations

from pydantic import BaseModel


class FestivalIn(BaseModel):
    name: str | None = None
    types: str | None = None
    description: str | None = None
    event_time: str | None = None
    location: str | None = None
    price_level: int | str | None = None
    images: str | None = None
    videos: str | None = None
    advise: str | None = None
