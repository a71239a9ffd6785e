from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


ExamType = Literal["CBT", "Written"]


class CourseBase(BaseModel):
    level_id: uuid.UUID
    course_code: str = Field(min_length=1, max_length=10)
    course_name: str = Field(min_length=1)
    credit_unit: int = Field(default=3, ge=0)
    exam_type: ExamType = "Written"


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    level_id: uuid.UUID | None = None
    course_code: str | None = Field(default=None, max_length=10)
    course_name: str | None = None
    credit_unit: int | None = Field(default=None, ge=0)
    exam_type: ExamType | None = None


class CourseOut(CourseBase):
    id: uuid.UUID
    program_id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
