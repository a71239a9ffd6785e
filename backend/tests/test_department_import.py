from __future__ import annotations

from sqlalchemy import select

from models.college import College
from models.department import Department
from services.department_import import import_departments


def _seed_college(db, name: str = "COLLEGE OF SCIENCE") -> College:
    college = College(name=name, code="COS")
    db.add(college)
    db.commit()
    return college


def test_no_rows(db):
    result = import_departments(db, [])
    assert result.ok is False
    assert result.message == "No department data provided."


def test_imports_valid_rows(db):
    college = _seed_college(db)
    result = import_departments(
        db,
        [
            {"name": "Physics", "college_name": "college of science"},
            {"name": "Chemistry", "college_name": "COLLEGE OF SCIENCE"},
        ],
    )

    assert result.ok is True
    assert result.created == 2
    assert result.message == "2 departments imported successfully."
    rows = db.execute(select(Department).order_by(Department.name)).scalars().all()
    assert [d.name for d in rows] == ["Chemistry", "Physics"]
    assert {d.college_id for d in rows} == {college.id}


def test_bad_rows_are_reported_and_skipped(db):
    _seed_college(db)
    db.add(Department(name="Physics", college_id=db.execute(select(College.id)).scalar_one()))
    db.commit()

    result = import_departments(
        db,
        [
            {"name": "physics", "college_name": "College of Science"},
            {"name": "Botany", "college_name": "College of Arts"},
            {"college_name": "College of Science"},
            {"name": "Zoology", "college_name": "College of Science"},
            {"name": "Zoology", "college_name": "College of Science"},
        ],
    )

    assert result.ok is True
    assert result.created == 1
    assert result.message.startswith("1 departments imported successfully. 4 rows failed. Errors: ")
    assert "Row with name physics: Department already exists." in result.message
    assert 'Row with name Botany: College "College of Arts" not found.' in result.message
    assert "Row with name N/A: Invalid data format." in result.message
    assert result.message.endswith("...")


def test_all_rows_failing_commits_nothing(db):
    result = import_departments(db, [{"name": "Physics", "college_name": "Nowhere"}])
    assert result.ok is False
    assert result.created == 0
    assert db.execute(select(Department)).first() is None
