from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.sql import func

from models.base import Base


class CombinedCourseOffering(Base):
    __tablename__ = "combined_course_offerings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    combined_course_id = Column(
        Uuid, ForeignKey("combined_courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    program_id = Column(Uuid, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False)
    level_id = Column(Uuid, ForeignKey("levels.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("combined_course_id", "level_id", name="uq_combined_course_offerings_level"),
    )
