from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.college import College
from models.department import Department
from schemas.department import DepartmentCreate, DepartmentOut, DepartmentUpdate
from services.text_format import normalize_name, title_case


router = APIRouter()


def _require_college(db: Session, college_id: uuid.UUID) -> College:
    college = db.get(College, college_id)
    if college is None:
        raise HTTPException(status_code=404, detail="COLLEGE_NOT_FOUND")
    return college


def _ensure_unique_department(
    db: Session,
    *,
    name: str,
    college_id: uuid.UUID,
    exclude_department_id: uuid.UUID | None,
) -> None:
    key = normalize_name(name)
    q = select(Department.id, Department.name).where(Department.college_id == college_id)
    if exclude_department_id is not None:
        q = q.where(Department.id != exclude_department_id)
    for _department_id, existing in db.execute(q).all():
        if normalize_name(existing) == key:
            raise HTTPException(status_code=409, detail="DEPARTMENT_ALREADY_EXISTS")


@router.get("/", response_model=list[DepartmentOut])
def list_departments(
    college_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[DepartmentOut]:
    q = select(Department).order_by(Department.name.asc())
    if college_id is not None:
        q = q.where(Department.college_id == college_id)
    return db.execute(q).scalars().all()


@router.post("/", response_model=DepartmentOut)
def create_department(
    payload: DepartmentCreate,
    db: Session = Depends(get_db),
) -> DepartmentOut:
    name = title_case(" ".join(payload.name.split()))
    if not name:
        raise HTTPException(status_code=400, detail="INVALID_NAME")
    _require_college(db, payload.college_id)
    _ensure_unique_department(db, name=name, college_id=payload.college_id, exclude_department_id=None)

    department = Department(name=name, college_id=payload.college_id)
    db.add(department)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="DEPARTMENT_ALREADY_EXISTS")
    db.refresh(department)
    return department


@router.patch("/{department_id}", response_model=DepartmentOut)
def update_department(
    department_id: uuid.UUID,
    payload: DepartmentUpdate,
    db: Session = Depends(get_db),
) -> DepartmentOut:
    department = db.get(Department, department_id)
    if department is None:
        raise HTTPException(status_code=404, detail="DEPARTMENT_NOT_FOUND")

    updates = payload.model_dump(exclude_unset=True)
    name = department.name
    college_id = department.college_id
    if updates.get("name") is not None:
        name = title_case(" ".join(str(updates["name"]).split()))
        if not name:
            raise HTTPException(status_code=400, detail="INVALID_NAME")
    if updates.get("college_id") is not None:
        college_id = _require_college(db, updates["college_id"]).id

    _ensure_unique_department(db, name=name, college_id=college_id, exclude_department_id=department_id)
    department.name = name
    department.college_id = college_id

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(department)
    return department


@router.delete("/{department_id}")
def delete_department(
    department_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    department = db.get(Department, department_id)
    if department is None:
        raise HTTPException(status_code=404, detail="DEPARTMENT_NOT_FOUND")
    db.delete(department)
    db.commit()
    return {"ok": True}
