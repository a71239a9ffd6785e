from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from models.venue import Venue
from schemas.admin import AdminActionResult
from schemas.venue import VenueCreate
from services.import_report import summarize_rows


logger = logging.getLogger(__name__)


def import_venues(db: Session, rows: list[dict[str, Any]]) -> AdminActionResult:
    """Bulk-create venues; rows whose code is malformed or already taken are skipped."""

    if not rows:
        return AdminActionResult(ok=False, message="No venue data provided.")

    taken = {str(code).upper() for (code,) in db.execute(select(Venue.code)).all()}

    created = 0
    errors: list[str] = []

    for raw in rows:
        try:
            venue = VenueCreate.model_validate(raw)
        except ValidationError:
            label = raw.get("code") if isinstance(raw, dict) else None
            errors.append(f"Row with code {label or 'N/A'}: Invalid data format.")
            continue

        code = venue.code.strip().upper()
        if not code or not venue.name.strip():
            errors.append("Row with code N/A: Invalid data format.")
            continue
        if code in taken:
            errors.append(f"Row with code {code}: Venue code already exists.")
            continue

        db.add(Venue(**{**venue.model_dump(), "code": code, "name": venue.name.strip()}))
        taken.add(code)
        created += 1

    if created:
        db.commit()

    if errors:
        logger.warning("Venue import: %d rows failed", len(errors))

    return AdminActionResult(ok=created > 0, created=created, message=summarize_rows("venues", created, errors))
