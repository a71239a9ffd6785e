from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ProgramBase(BaseModel):
    name: str = Field(min_length=1)
    department_id: uuid.UUID
    max_level: int = Field(default=4, ge=1, le=7)
    expected_intake: int = Field(default=0, ge=0)


class ProgramCreate(ProgramBase):
    pass


class ProgramUpdate(BaseModel):
    name: str | None = None
    department_id: uuid.UUID | None = None
    max_level: int | None = Field(default=None, ge=1, le=7)
    expected_intake: int | None = Field(default=None, ge=0)


class ProgramOut(ProgramBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
