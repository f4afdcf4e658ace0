from __future__ import annotations

from pydantic import BaseModel


class ObjectIn(BaseModel):
    title: str | None = None
    content: str | None = None
