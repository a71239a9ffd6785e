from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.sql import func

from models.base import Base


EXAM_TYPES = ("CBT", "Written")


class Course(Base):
    __tablename__ = "courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    level_id = Column(Uuid, ForeignKey("levels.id", ondelete="CASCADE"), nullable=False, index=True)
    # Denormalized from the level so program-wide lookups skip a join.
    program_id = Column(Uuid, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False)
    course_code = Column(Text, nullable=False)
    course_name = Column(Text, nullable=False)
    credit_unit = Column(Integer, nullable=False, default=3)
    exam_type = Column(String(10), nullable=False, default="Written")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_courses_program_code", "program_id", "course_code"),
        CheckConstraint("credit_unit >= 0", name="ck_courses_credit_unit"),
        CheckConstraint("exam_type in ('CBT', 'Written')", name="ck_courses_exam_type"),
    )
