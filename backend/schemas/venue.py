from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from schemas.course import ExamType


class VenueBase(BaseModel):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    capacity: int = Field(ge=1)
    venue_type: ExamType = "Written"
    latitude: str | None = None
    longitude: str | None = None
    radius: float | None = Field(default=None, ge=0)


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    code: str | None = None
    name: str | None = None
    capacity: int | None = Field(default=None, ge=1)
    venue_type: ExamType | None = None
    latitude: str | None = None
    longitude: str | None = None
    radius: float | None = Field(default=None, ge=0)


class VenueOut(VenueBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True


class VenueImportRequest(BaseModel):
    rows: list[dict] = Field(default_factory=list)
