from __future__ import annotations

from pydantic import BaseModel


class ObjectiveIn(BaseModel):
    name: str | None = None
    type: str | None = None
    description: str | None = None
    points: int | None = None
    image: str | None = None
