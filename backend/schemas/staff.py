from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class StaffBase(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    position: str = Field(min_length=1)
    college_id: uuid.UUID
    department_id: uuid.UUID


class StaffCreate(StaffBase):
    pass


class StaffUpdate(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    position: str | None = None
    college_id: uuid.UUID | None = None
    department_id: uuid.UUID | None = None


class StaffOut(StaffBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
