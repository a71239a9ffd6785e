from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class LevelBase(BaseModel):
    program_id: uuid.UUID
    level: int = Field(ge=1, le=7)
    students_count: int = Field(default=0, ge=0)


class LevelCreate(LevelBase):
    pass


class LevelUpdate(BaseModel):
    program_id: uuid.UUID | None = None
    level: int | None = Field(default=None, ge=1, le=7)
    students_count: int | None = Field(default=None, ge=0)


class LevelOut(LevelBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
