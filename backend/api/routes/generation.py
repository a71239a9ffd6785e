from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.generation import GenerationData
from services.generation_data import compile_generation_data


router = APIRouter()


@router.get("/data", response_model=GenerationData)
def get_generation_data(db: Session = Depends(get_db)) -> GenerationData:
    return compile_generation_data(db)
