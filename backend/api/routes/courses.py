from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.course import Course
from models.level import Level
from schemas.course import CourseCreate, CourseOut, CourseUpdate
from services.hierarchy_import import FALLBACK_COURSE_CODE
from services.text_format import title_case


router = APIRouter()


def _require_level(db: Session, level_id: uuid.UUID) -> Level:
    level = db.get(Level, level_id)
    if level is None:
        raise HTTPException(status_code=404, detail="LEVEL_NOT_FOUND")
    return level


def _ensure_unique_course_code(
    db: Session,
    *,
    program_id: uuid.UUID,
    course_code: str,
    exclude_course_id: uuid.UUID | None,
) -> None:
    # Codes are unique per program; placeholder codes never collide.
    if course_code == FALLBACK_COURSE_CODE:
        return
    q = select(Course.id).where(Course.program_id == program_id).where(Course.course_code == course_code)
    if exclude_course_id is not None:
        q = q.where(Course.id != exclude_course_id)
    if db.execute(q.limit(1)).first() is not None:
        raise HTTPException(status_code=409, detail="COURSE_CODE_ALREADY_EXISTS")


@router.get("/", response_model=list[CourseOut])
def list_courses(
    level_id: uuid.UUID | None = Query(default=None),
    program_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[CourseOut]:
    q = select(Course).order_by(Course.course_code.asc())
    if level_id is not None:
        q = q.where(Course.level_id == level_id)
    if program_id is not None:
        q = q.where(Course.program_id == program_id)
    return db.execute(q).scalars().all()


@router.post("/", response_model=CourseOut)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
) -> CourseOut:
    data = payload.model_dump()
    data["course_code"] = str(data["course_code"]).strip().upper()
    data["course_name"] = title_case(str(data["course_name"]).strip())
    if not data["course_code"]:
        raise HTTPException(status_code=400, detail="INVALID_CODE")
    if not data["course_name"]:
        raise HTTPException(status_code=400, detail="INVALID_NAME")

    level = _require_level(db, payload.level_id)
    _ensure_unique_course_code(db, program_id=level.program_id, course_code=data["course_code"], exclude_course_id=None)

    course = Course(**data, program_id=level.program_id)
    db.add(course)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(course)
    return course


@router.patch("/{course_id}", response_model=CourseOut)
def update_course(
    course_id: uuid.UUID,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
) -> CourseOut:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="COURSE_NOT_FOUND")

    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if "course_code" in updates:
        updates["course_code"] = str(updates["course_code"]).strip().upper()
        if not updates["course_code"]:
            raise HTTPException(status_code=400, detail="INVALID_CODE")
    if "course_name" in updates:
        updates["course_name"] = title_case(str(updates["course_name"]).strip())
        if not updates["course_name"]:
            raise HTTPException(status_code=400, detail="INVALID_NAME")
    if "level_id" in updates:
        # Keep the denormalized program_id in step with the level.
        updates["program_id"] = _require_level(db, updates["level_id"]).program_id

    if "level_id" in updates or "course_code" in updates:
        _ensure_unique_course_code(
            db,
            program_id=updates.get("program_id", course.program_id),
            course_code=updates.get("course_code", course.course_code),
            exclude_course_id=course_id,
        )

    for k, v in updates.items():
        setattr(course, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(course)
    return course


@router.delete("/{course_id}")
def delete_course(
    course_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="COURSE_NOT_FOUND")
    db.delete(course)
    db.commit()
    return {"ok": True}
