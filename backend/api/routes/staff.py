from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.college import College
from models.department import Department
from models.staff import Staff
from schemas.staff import StaffCreate, StaffOut, StaffUpdate


router = APIRouter()


def _require_placement(db: Session, *, college_id: uuid.UUID, department_id: uuid.UUID) -> None:
    if db.get(College, college_id) is None:
        raise HTTPException(status_code=404, detail="COLLEGE_NOT_FOUND")
    department = db.get(Department, department_id)
    if department is None:
        raise HTTPException(status_code=404, detail="DEPARTMENT_NOT_FOUND")
    if department.college_id != college_id:
        raise HTTPException(status_code=422, detail="DEPARTMENT_NOT_IN_COLLEGE")


def _ensure_unique_email(db: Session, *, email: str, exclude_staff_id: uuid.UUID | None) -> None:
    q = select(Staff.id).where(func.lower(Staff.email) == email.lower())
    if exclude_staff_id is not None:
        q = q.where(Staff.id != exclude_staff_id)
    if db.execute(q.limit(1)).first() is not None:
        raise HTTPException(status_code=409, detail="STAFF_EMAIL_ALREADY_EXISTS")


@router.get("/", response_model=list[StaffOut])
def list_staff(
    department_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[StaffOut]:
    q = select(Staff).order_by(Staff.name.asc())
    if department_id is not None:
        q = q.where(Staff.department_id == department_id)
    return db.execute(q).scalars().all()


@router.post("/", response_model=StaffOut)
def create_staff(
    payload: StaffCreate,
    db: Session = Depends(get_db),
) -> StaffOut:
    data = payload.model_dump()
    data["email"] = str(data["email"]).lower()
    _require_placement(db, college_id=payload.college_id, department_id=payload.department_id)
    _ensure_unique_email(db, email=data["email"], exclude_staff_id=None)

    staff = Staff(**data)
    db.add(staff)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="STAFF_EMAIL_ALREADY_EXISTS")
    db.refresh(staff)
    return staff


@router.patch("/{staff_id}", response_model=StaffOut)
def update_staff(
    staff_id: uuid.UUID,
    payload: StaffUpdate,
    db: Session = Depends(get_db),
) -> StaffOut:
    staff = db.get(Staff, staff_id)
    if staff is None:
        raise HTTPException(status_code=404, detail="STAFF_NOT_FOUND")

    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if "email" in updates:
        updates["email"] = str(updates["email"]).lower()
        _ensure_unique_email(db, email=updates["email"], exclude_staff_id=staff_id)
    if "college_id" in updates or "department_id" in updates:
        _require_placement(
            db,
            college_id=updates.get("college_id", staff.college_id),
            department_id=updates.get("department_id", staff.department_id),
        )

    for k, v in updates.items():
        setattr(staff, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(staff)
    return staff


@router.delete("/{staff_id}")
def delete_staff(
    staff_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    staff = db.get(Staff, staff_id)
    if staff is None:
        raise HTTPException(status_code=404, detail="STAFF_NOT_FOUND")
    db.delete(staff)
    db.commit()
    return {"ok": True}
