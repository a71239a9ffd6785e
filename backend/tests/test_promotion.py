from __future__ import annotations

from sqlalchemy import select

from models.college import College
from models.department import Department
from models.level import Level
from models.program import Program
from services.promotion import promote_students


def _program(db, *, intake: int, counts: dict[int, int]) -> Program:
    college = College(name=f"COLLEGE {intake}", code="C")
    db.add(college)
    db.flush()
    department = Department(name="Dept", college_id=college.id)
    db.add(department)
    db.flush()
    program = Program(name="Prog", department_id=department.id, max_level=4, expected_intake=intake)
    db.add(program)
    db.flush()
    for number, students in counts.items():
        db.add(Level(program_id=program.id, level=number, students_count=students))
    db.commit()
    return program


def _counts(db, program: Program) -> dict[int, int]:
    db.expire_all()
    rows = db.execute(select(Level).where(Level.program_id == program.id)).scalars().all()
    return {lv.level: lv.students_count for lv in rows}


def test_no_programs(db):
    result = promote_students(db)
    assert result.ok is False
    assert result.message == "No programs found to process."


def test_students_move_up_one_level(db):
    program = _program(db, intake=50, counts={1: 100, 2: 80, 3: 60, 4: 40})

    result = promote_students(db)

    assert result.ok is True
    assert result.updated == 4
    assert result.message == "Student promotion process completed successfully!"
    assert _counts(db, program) == {1: 50, 2: 100, 3: 80, 4: 60}


def test_programs_are_promoted_independently(db):
    first = _program(db, intake=10, counts={1: 5, 2: 7})
    second = _program(db, intake=0, counts={1: 30})
    empty = _program(db, intake=99, counts={})

    promote_students(db)

    assert _counts(db, first) == {1: 10, 2: 5}
    assert _counts(db, second) == {1: 0}
    assert _counts(db, empty) == {}
