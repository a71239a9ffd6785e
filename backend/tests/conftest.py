from __future__ import annotations

import os

# Must be set before core.config is imported anywhere.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

import models
from core.database import ENGINE, SessionLocal
from models.base import Base


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    from main import app

    with TestClient(app) as c:
        yield c


def table_counts(session) -> dict[str, int]:
    session.expire_all()
    return {
        model.__tablename__: session.execute(select(func.count()).select_from(model)).scalar_one()
        for model in (models.College, models.Department, models.Program, models.Level, models.Course)
    }


@pytest.fixture()
def counts(db):
    return lambda: table_counts(db)
