from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CollegeBase(BaseModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=10)


class CollegeCreate(CollegeBase):
    pass


class CollegeUpdate(BaseModel):
    name: str | None = None
    code: str | None = Field(default=None, max_length=10)


class CollegeOut(CollegeBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
