from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from models.venue import Venue
from schemas.course import ExamType
from schemas.venue import VenueCreate, VenueOut, VenueUpdate


router = APIRouter()


def _ensure_unique_venue_code(db: Session, *, code: str, exclude_venue_id: uuid.UUID | None) -> None:
    q = select(Venue.id).where(Venue.code == code)
    if exclude_venue_id is not None:
        q = q.where(Venue.id != exclude_venue_id)
    if db.execute(q.limit(1)).first() is not None:
        raise HTTPException(status_code=409, detail="VENUE_CODE_ALREADY_EXISTS")


@router.get("/", response_model=list[VenueOut])
def list_venues(
    venue_type: ExamType | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[VenueOut]:
    q = select(Venue).order_by(Venue.name.asc())
    if venue_type is not None:
        q = q.where(Venue.venue_type == venue_type)
    return db.execute(q).scalars().all()


@router.post("/", response_model=VenueOut)
def create_venue(
    payload: VenueCreate,
    db: Session = Depends(get_db),
) -> VenueOut:
    data = payload.model_dump()
    data["code"] = data["code"].strip().upper()
    data["name"] = data["name"].strip()
    if not data["code"]:
        raise HTTPException(status_code=400, detail="INVALID_CODE")
    if not data["name"]:
        raise HTTPException(status_code=400, detail="INVALID_NAME")

    _ensure_unique_venue_code(db, code=data["code"], exclude_venue_id=None)

    venue = Venue(**data)
    db.add(venue)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="VENUE_CODE_ALREADY_EXISTS")
    db.refresh(venue)
    return venue


@router.patch("/{venue_id}", response_model=VenueOut)
def update_venue(
    venue_id: uuid.UUID,
    payload: VenueUpdate,
    db: Session = Depends(get_db),
) -> VenueOut:
    venue = db.get(Venue, venue_id)
    if venue is None:
        raise HTTPException(status_code=404, detail="VENUE_NOT_FOUND")

    updates = payload.model_dump(exclude_unset=True)
    if updates.get("code") is not None:
        updates["code"] = str(updates["code"]).strip().upper()
        if not updates["code"]:
            raise HTTPException(status_code=400, detail="INVALID_CODE")
        _ensure_unique_venue_code(db, code=updates["code"], exclude_venue_id=venue_id)
    if updates.get("name") is not None:
        updates["name"] = str(updates["name"]).strip()
        if not updates["name"]:
            raise HTTPException(status_code=400, detail="INVALID_NAME")

    # Location fields may be cleared; the rest ignore explicit nulls.
    for k, v in updates.items():
        if v is not None or k in ("latitude", "longitude", "radius"):
            setattr(venue, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(venue)
    return venue


@router.delete("/{venue_id}")
def delete_venue(
    venue_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    venue = db.get(Venue, venue_id)
    if venue is None:
        raise HTTPException(status_code=404, detail="VENUE_NOT_FOUND")
    db.delete(venue)
    db.commit()
    return {"ok": True}
