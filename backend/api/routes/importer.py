from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from schemas.admin import AdminActionResult
from schemas.department import DepartmentImportRequest
from schemas.importer import AnalyzedImportRequest, ImportResult
from schemas.venue import VenueImportRequest
from services.department_import import import_departments
from services.hierarchy_import import reconcile_entities
from services.venue_import import import_venues


logger = logging.getLogger(__name__)


router = APIRouter()


@router.post("/analyzed", response_model=ImportResult)
def save_analyzed_entities(
    payload: AnalyzedImportRequest,
    db: Session = Depends(get_db),
) -> ImportResult:
    if len(payload.entities) > settings.import_max_entities:
        raise HTTPException(
            status_code=422,
            detail={
                "code": "TOO_MANY_ENTITIES",
                "errors": [f"At most {settings.import_max_entities} entities can be saved per request."],
            },
        )

    result = reconcile_entities(db, payload.entities)
    if not result.success:
        logger.warning("Analyzed import failed: %s", result.message)
    return result


@router.post("/departments", response_model=AdminActionResult)
def import_department_rows(
    payload: DepartmentImportRequest,
    db: Session = Depends(get_db),
) -> AdminActionResult:
    return import_departments(db, payload.rows)


@router.post("/venues", response_model=AdminActionResult)
def import_venue_rows(
    payload: VenueImportRequest,
    db: Session = Depends(get_db),
) -> AdminActionResult:
    return import_venues(db, payload.rows)
