from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from schemas.venue import VenueOut


class GenerationCourse(BaseModel):
    id: uuid.UUID
    course_code: str
    course_name: str
    credit_unit: int
    exam_type: str
    level_id: uuid.UUID
    program_id: uuid.UUID
    level: int
    students_count: int
    offering_programs: list[str] = Field(default_factory=list)


class GenerationStaff(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    phone: str
    position: str
    college_id: uuid.UUID
    department_id: uuid.UUID
    college_name: str | None = None
    department_name: str | None = None


class GenerationData(BaseModel):
    courses: list[GenerationCourse] = Field(default_factory=list)
    staff: list[GenerationStaff] = Field(default_factory=list)
    venues: list[VenueOut] = Field(default_factory=list)
