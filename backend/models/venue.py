from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String, Text, Uuid
from sqlalchemy.sql import func

from models.base import Base


class Venue(Base):
    __tablename__ = "venues"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    capacity = Column(Integer, nullable=False)
    # Matches the exam types a venue can host.
    venue_type = Column(String(10), nullable=False, default="Written")
    latitude = Column(Text, nullable=True)
    longitude = Column(Text, nullable=True)
    radius = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_venues_capacity"),
        CheckConstraint("venue_type in ('CBT', 'Written')", name="ck_venues_venue_type"),
    )
