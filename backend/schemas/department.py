from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class DepartmentBase(BaseModel):
    name: str = Field(min_length=1)
    college_id: uuid.UUID


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(BaseModel):
    name: str | None = None
    college_id: uuid.UUID | None = None


class DepartmentOut(DepartmentBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True


class DepartmentImportRow(BaseModel):
    name: str = Field(min_length=1)
    college_name: str = Field(min_length=1)


class DepartmentImportRequest(BaseModel):
    # Rows stay loosely typed so one malformed row fails alone instead of the whole request.
    rows: list[dict] = Field(default_factory=list)
