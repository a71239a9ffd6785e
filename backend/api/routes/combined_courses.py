from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.combined_course import CombinedCourse
from models.combined_course_offering import CombinedCourseOffering
from models.course import Course
from models.level import Level
from models.program import Program
from schemas.admin import AdminActionResult
from schemas.combined_course import (
    CombinedCourseCreate,
    CombinedCourseOfferingsUpdate,
    CombinedCourseOut,
    OfferingIn,
    OfferingOut,
)


router = APIRouter()


def _validated_offerings(db: Session, offerings: list[OfferingIn]) -> list[OfferingIn]:
    unique = list({o.level_id: o for o in offerings}.values())
    levels = {
        lv.id: lv
        for lv in db.execute(select(Level).where(Level.id.in_([o.level_id for o in unique]))).scalars().all()
    }
    for offering in unique:
        level = levels.get(offering.level_id)
        if level is None:
            raise HTTPException(status_code=404, detail="LEVEL_NOT_FOUND")
        if level.program_id != offering.program_id:
            raise HTTPException(status_code=422, detail="OFFERING_LEVEL_NOT_IN_PROGRAM")
    return unique


def _add_offerings(db: Session, combined_course_id: uuid.UUID, offerings: list[OfferingIn]) -> None:
    for o in offerings:
        db.add(CombinedCourseOffering(combined_course_id=combined_course_id, program_id=o.program_id, level_id=o.level_id))


def _build_out(db: Session, courses: list[CombinedCourse]) -> list[CombinedCourseOut]:
    if not courses:
        return []

    rows = db.execute(
        select(CombinedCourseOffering.combined_course_id, Program.id, Program.name, Level.id, Level.level)
        .join(Level, Level.id == CombinedCourseOffering.level_id)
        .join(Program, Program.id == CombinedCourseOffering.program_id)
        .where(CombinedCourseOffering.combined_course_id.in_([c.id for c in courses]))
        .order_by(Program.name.asc(), Level.level.asc())
    ).all()

    offerings_by_course: dict[uuid.UUID, list[OfferingOut]] = {}
    for cc_id, program_id, program_name, level_id, level in rows:
        offerings_by_course.setdefault(cc_id, []).append(
            OfferingOut(program_id=program_id, program_name=program_name, level_id=level_id, level=level)
        )

    return [
        CombinedCourseOut(
            id=c.id,
            base_course_id=c.base_course_id,
            course_code=c.course_code,
            course_name=c.course_name,
            exam_type=c.exam_type,
            offerings=offerings_by_course.get(c.id, []),
            created_at=c.created_at,
            updated_at=c.updated_at,
        )
        for c in courses
    ]


@router.get("/", response_model=list[CombinedCourseOut])
def list_combined_courses(db: Session = Depends(get_db)) -> list[CombinedCourseOut]:
    courses = db.execute(select(CombinedCourse).order_by(CombinedCourse.course_code.asc())).scalars().all()
    return _build_out(db, list(courses))


@router.post("/", response_model=CombinedCourseOut)
def create_combined_course(
    payload: CombinedCourseCreate,
    db: Session = Depends(get_db),
) -> CombinedCourseOut:
    existing = db.execute(
        select(CombinedCourse.id).where(CombinedCourse.base_course_id == payload.course_id).limit(1)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="COMBINED_COURSE_ALREADY_EXISTS")

    base = db.get(Course, payload.course_id)
    if base is None:
        raise HTTPException(status_code=404, detail="COURSE_NOT_FOUND")
    offerings = _validated_offerings(db, payload.offerings)

    combined = CombinedCourse(
        base_course_id=base.id,
        course_code=base.course_code,
        course_name=base.course_name,
        exam_type=base.exam_type,
    )
    db.add(combined)
    db.flush()
    _add_offerings(db, combined.id, offerings)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="COMBINED_COURSE_ALREADY_EXISTS")
    db.refresh(combined)
    return _build_out(db, [combined])[0]


@router.put("/{combined_course_id}/offerings", response_model=CombinedCourseOut)
def replace_offerings(
    combined_course_id: uuid.UUID,
    payload: CombinedCourseOfferingsUpdate,
    db: Session = Depends(get_db),
) -> CombinedCourseOut:
    combined = db.get(CombinedCourse, combined_course_id)
    if combined is None:
        raise HTTPException(status_code=404, detail="COMBINED_COURSE_NOT_FOUND")
    offerings = _validated_offerings(db, payload.offerings)

    db.execute(delete(CombinedCourseOffering).where(CombinedCourseOffering.combined_course_id == combined.id))
    _add_offerings(db, combined.id, offerings)
    combined.updated_at = func.now()

    db.commit()
    db.refresh(combined)
    return _build_out(db, [combined])[0]


@router.delete("/{combined_course_id}", response_model=AdminActionResult)
def delete_combined_course(
    combined_course_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> AdminActionResult:
    deleted_links = (
        db.execute(
            delete(CombinedCourseOffering).where(CombinedCourseOffering.combined_course_id == combined_course_id)
        ).rowcount
        or 0
    )
    deleted = db.execute(delete(CombinedCourse).where(CombinedCourse.id == combined_course_id)).rowcount or 0
    if deleted == 0:
        db.rollback()
        raise HTTPException(status_code=404, detail="COMBINED_COURSE_NOT_FOUND")

    db.commit()
    return AdminActionResult(ok=True, deleted=deleted + deleted_links, message="Combined course deleted successfully.")
