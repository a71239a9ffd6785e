from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.sql import func

from models.base import Base


class Program(Base):
    __tablename__ = "programs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    department_id = Column(Uuid, ForeignKey("departments.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    max_level = Column(Integer, nullable=False, default=4)
    expected_intake = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("max_level >= 1 and max_level <= 7", name="ck_programs_max_level"),
        CheckConstraint("expected_intake >= 0", name="ck_programs_expected_intake"),
    )
