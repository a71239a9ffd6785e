from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

import models  # noqa: F401  (registers every table on Base.metadata)
from core.database import ENGINE
from models.base import Base


logger = logging.getLogger(__name__)


def ensure_schema(engine: Engine | None = None) -> None:
    """Create any missing tables.

    Idempotent: existing tables are left untouched, so this is safe to run on
    every startup.
    """

    engine = engine or ENGINE
    Base.metadata.create_all(bind=engine)
    logger.info("Schema ensured (%d tables)", len(Base.metadata.tables))
