from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.sql import func

from models.base import Base


class CombinedCourse(Base):
    """A course examined once for several program/level offerings."""

    __tablename__ = "combined_courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # A course can be the base of at most one combined course.
    base_course_id = Column(Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, unique=True)
    # Copied from the base course when the group is created.
    course_code = Column(Text, nullable=False)
    course_name = Column(Text, nullable=False)
    exam_type = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
