from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.department import Department
from models.program import Program
from schemas.program import ProgramCreate, ProgramOut, ProgramUpdate
from services.text_format import title_case


router = APIRouter()


def _require_department(db: Session, department_id: uuid.UUID) -> Department:
    department = db.get(Department, department_id)
    if department is None:
        raise HTTPException(status_code=404, detail="DEPARTMENT_NOT_FOUND")
    return department


@router.get("/", response_model=list[ProgramOut])
def list_programs(
    department_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[ProgramOut]:
    q = select(Program).order_by(Program.name.asc())
    if department_id is not None:
        q = q.where(Program.department_id == department_id)
    return db.execute(q).scalars().all()


@router.post("/", response_model=ProgramOut)
def create_program(
    payload: ProgramCreate,
    db: Session = Depends(get_db),
) -> ProgramOut:
    data = payload.model_dump()
    data["name"] = title_case(str(data["name"]).strip())
    if not data["name"]:
        raise HTTPException(status_code=400, detail="INVALID_NAME")
    _require_department(db, payload.department_id)

    program = Program(**data)
    db.add(program)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(program)
    return program


@router.patch("/{program_id}", response_model=ProgramOut)
def update_program(
    program_id: uuid.UUID,
    payload: ProgramUpdate,
    db: Session = Depends(get_db),
) -> ProgramOut:
    program = db.get(Program, program_id)
    if program is None:
        raise HTTPException(status_code=404, detail="PROGRAM_NOT_FOUND")

    updates = payload.model_dump(exclude_unset=True)
    if updates.get("name") is not None:
        updates["name"] = title_case(str(updates["name"]).strip())
        if not updates["name"]:
            raise HTTPException(status_code=400, detail="INVALID_NAME")
    if updates.get("department_id") is not None:
        _require_department(db, updates["department_id"])

    for k, v in updates.items():
        if v is not None:
            setattr(program, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")

    db.refresh(program)
    return program


@router.delete("/{program_id}")
def delete_program(
    program_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    program = db.get(Program, program_id)
    if program is None:
        raise HTTPException(status_code=404, detail="PROGRAM_NOT_FOUND")
    db.delete(program)
    db.commit()
    return {"ok": True}
