from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.combined_course_offering import CombinedCourseOffering
from models.course import Course
from models.level import Level
from models.program import Program
from schemas.level import LevelCreate, LevelOut, LevelUpdate
from services.hierarchy_import import FALLBACK_COURSE_CODE


router = APIRouter()


def _require_program(db: Session, program_id: uuid.UUID) -> Program:
    program = db.get(Program, program_id)
    if program is None:
        raise HTTPException(status_code=404, detail="PROGRAM_NOT_FOUND")
    return program


def _ensure_unique_level(
    db: Session,
    *,
    program_id: uuid.UUID,
    level: int,
    exclude_level_id: uuid.UUID | None,
) -> None:
    q = select(Level.id).where(Level.program_id == program_id).where(Level.level == int(level))
    if exclude_level_id is not None:
        q = q.where(Level.id != exclude_level_id)
    if db.execute(q.limit(1)).first() is not None:
        raise HTTPException(status_code=409, detail="LEVEL_ALREADY_EXISTS")


def _ensure_courses_fit_program(db: Session, *, level_id: uuid.UUID, program_id: uuid.UUID) -> None:
    codes = {
        code
        for (code,) in db.execute(select(Course.course_code).where(Course.level_id == level_id)).all()
        if code != FALLBACK_COURSE_CODE
    }
    if not codes:
        return
    clash = db.execute(
        select(Course.id)
        .where(Course.program_id == program_id)
        .where(Course.level_id != level_id)
        .where(Course.course_code.in_(codes))
        .limit(1)
    ).first()
    if clash is not None:
        raise HTTPException(status_code=409, detail="COURSE_CODE_ALREADY_EXISTS")


@router.get("/", response_model=list[LevelOut])
def list_levels(
    program_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[LevelOut]:
    q = select(Level).order_by(Level.program_id.asc(), Level.level.asc())
    if program_id is not None:
        q = q.where(Level.program_id == program_id)
    return db.execute(q).scalars().all()


@router.post("/", response_model=LevelOut)
def create_level(
    payload: LevelCreate,
    db: Session = Depends(get_db),
) -> LevelOut:
    _require_program(db, payload.program_id)
    _ensure_unique_level(db, program_id=payload.program_id, level=payload.level, exclude_level_id=None)

    level = Level(**payload.model_dump())
    db.add(level)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="LEVEL_ALREADY_EXISTS")
    db.refresh(level)
    return level


@router.patch("/{level_id}", response_model=LevelOut)
def update_level(
    level_id: uuid.UUID,
    payload: LevelUpdate,
    db: Session = Depends(get_db),
) -> LevelOut:
    level = db.get(Level, level_id)
    if level is None:
        raise HTTPException(status_code=404, detail="LEVEL_NOT_FOUND")

    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    program_id = updates.get("program_id", level.program_id)
    number = updates.get("level", level.level)
    if "program_id" in updates:
        _require_program(db, program_id)
    if "program_id" in updates or "level" in updates:
        _ensure_unique_level(db, program_id=program_id, level=number, exclude_level_id=level_id)

    moved = "program_id" in updates and program_id != level.program_id
    if moved:
        _ensure_courses_fit_program(db, level_id=level_id, program_id=program_id)

    for k, v in updates.items():
        setattr(level, k, v)
    if moved:
        # Courses and combined-course offerings carry a copy of their level's program_id.
        db.execute(update(Course).where(Course.level_id == level_id).values(program_id=program_id))
        db.execute(
            update(CombinedCourseOffering)
            .where(CombinedCourseOffering.level_id == level_id)
            .values(program_id=program_id)
        )

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(level)
    return level


@router.delete("/{level_id}")
def delete_level(
    level_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    level = db.get(Level, level_id)
    if level is None:
        raise HTTPException(status_code=404, detail="LEVEL_NOT_FOUND")
    db.delete(level)
    db.commit()
    return {"ok": True}
