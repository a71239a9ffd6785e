from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.admin import AdminActionResult
from services.promotion import promote_students


router = APIRouter()


@router.post("/promote-students", response_model=AdminActionResult)
def promote_all_students(db: Session = Depends(get_db)) -> AdminActionResult:
    return promote_students(db)
