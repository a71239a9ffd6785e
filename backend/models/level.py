from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.sql import func

from models.base import Base


class Level(Base):
    __tablename__ = "levels"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id = Column(Uuid, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True)
    level = Column(Integer, nullable=False)
    students_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("program_id", "level", name="uq_levels_program_level"),
        CheckConstraint("level >= 1 and level <= 7", name="ck_levels_level"),
        CheckConstraint("students_count >= 0", name="ck_levels_students_count"),
    )
