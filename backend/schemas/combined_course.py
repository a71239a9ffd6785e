from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class OfferingIn(BaseModel):
    program_id: uuid.UUID
    level_id: uuid.UUID


class CombinedCourseCreate(BaseModel):
    course_id: uuid.UUID
    offerings: list[OfferingIn] = Field(min_length=1)


class CombinedCourseOfferingsUpdate(BaseModel):
    offerings: list[OfferingIn] = Field(min_length=1)


class OfferingOut(BaseModel):
    program_id: uuid.UUID
    program_name: str
    level_id: uuid.UUID
    level: int


class CombinedCourseOut(BaseModel):
    id: uuid.UUID
    base_course_id: uuid.UUID
    course_code: str
    course_name: str
    exam_type: str
    offerings: list[OfferingOut] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
