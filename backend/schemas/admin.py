from __future__ import annotations

from pydantic import BaseModel


class AdminActionResult(BaseModel):
    ok: bool = True
    created: int = 0
    updated: int = 0
    deleted: int = 0
    message: str | None = None
