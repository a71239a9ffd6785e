from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.college import College
from schemas.college import CollegeCreate, CollegeOut, CollegeUpdate
from services.text_format import normalize_name


router = APIRouter()


def _format_name(value: str) -> str:
    return " ".join(str(value).split()).upper()


def _ensure_unique_college_name(db: Session, *, name: str, exclude_college_id: uuid.UUID | None) -> None:
    # Same key the importer matches on, so "College-of-Science" and
    # "College of Science" are one college.
    key = normalize_name(name)
    q = select(College.id, College.name)
    if exclude_college_id is not None:
        q = q.where(College.id != exclude_college_id)
    for _college_id, existing in db.execute(q).all():
        if normalize_name(existing) == key:
            raise HTTPException(status_code=409, detail="COLLEGE_NAME_ALREADY_EXISTS")


@router.get("/", response_model=list[CollegeOut])
def list_colleges(db: Session = Depends(get_db)) -> list[CollegeOut]:
    return db.execute(select(College).order_by(College.name.asc())).scalars().all()


@router.post("/", response_model=CollegeOut)
def create_college(
    payload: CollegeCreate,
    db: Session = Depends(get_db),
) -> CollegeOut:
    name = _format_name(payload.name)
    code = payload.code.strip().upper()
    if not name:
        raise HTTPException(status_code=400, detail="INVALID_NAME")
    if not code:
        raise HTTPException(status_code=400, detail="INVALID_CODE")

    _ensure_unique_college_name(db, name=name, exclude_college_id=None)

    college = College(name=name, code=code)
    db.add(college)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="COLLEGE_NAME_ALREADY_EXISTS")
    db.refresh(college)
    return college


@router.patch("/{college_id}", response_model=CollegeOut)
def update_college(
    college_id: uuid.UUID,
    payload: CollegeUpdate,
    db: Session = Depends(get_db),
) -> CollegeOut:
    college = db.get(College, college_id)
    if college is None:
        raise HTTPException(status_code=404, detail="COLLEGE_NOT_FOUND")

    updates = payload.model_dump(exclude_unset=True)
    if updates.get("name") is not None:
        updates["name"] = _format_name(updates["name"])
        if not updates["name"]:
            raise HTTPException(status_code=400, detail="INVALID_NAME")
        _ensure_unique_college_name(db, name=updates["name"], exclude_college_id=college_id)
    if updates.get("code") is not None:
        updates["code"] = str(updates["code"]).strip().upper()
        if not updates["code"]:
            raise HTTPException(status_code=400, detail="INVALID_CODE")

    for k, v in updates.items():
        if v is not None:
            setattr(college, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(college)
    return college


@router.delete("/{college_id}")
def delete_college(
    college_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    college = db.get(College, college_id)
    if college is None:
        raise HTTPException(status_code=404, detail="COLLEGE_NOT_FOUND")
    db.delete(college)
    db.commit()
    return {"ok": True}
