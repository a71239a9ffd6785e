from __future__ import annotations

from models.college import College
from models.combined_course import CombinedCourse
from models.combined_course_offering import CombinedCourseOffering
from models.course import Course
from models.department import Department
from models.level import Level
from models.program import Program
from models.staff import Staff
from models.venue import Venue
from services.generation_data import compile_generation_data


def _seed(db) -> dict:
    college = College(name="COLLEGE OF SCIENCE", code="COS")
    db.add(college)
    db.flush()
    dept = Department(name="Earth Sciences", college_id=college.id)
    db.add(dept)
    db.flush()
    physics = Program(name="Physics", department_id=dept.id)
    geology = Program(name="Geology", department_id=dept.id)
    db.add_all([physics, geology])
    db.flush()
    physics_one = Level(program_id=physics.id, level=1, students_count=100)
    geology_one = Level(program_id=geology.id, level=1, students_count=40)
    db.add_all([physics_one, geology_one])
    db.flush()
    mechanics = Course(
        level_id=physics_one.id, program_id=physics.id, course_code="PHY101", course_name="Mechanics", exam_type="CBT"
    )
    rocks = Course(level_id=geology_one.id, program_id=geology.id, course_code="GEO101", course_name="Rocks")
    db.add_all([mechanics, rocks])
    db.add(
        Staff(
            name="Ada Obi",
            email="ada@unilag.edu.ng",
            phone="0800",
            position="Lecturer",
            college_id=college.id,
            department_id=dept.id,
        )
    )
    db.add_all(
        [
            Venue(code="LT1", name="Lecture Theatre 1", capacity=300, venue_type="Written"),
            Venue(code="CBT1", name="CBT Centre", capacity=120, venue_type="CBT"),
        ]
    )
    db.commit()
    return {"physics": physics, "geology": geology, "physics_one": physics_one, "geology_one": geology_one, "mechanics": mechanics}


def _combine(db, course: Course, *offerings: Level) -> None:
    combined = CombinedCourse(
        base_course_id=course.id,
        course_code=course.course_code,
        course_name=course.course_name,
        exam_type=course.exam_type,
    )
    db.add(combined)
    db.flush()
    for level in offerings:
        db.add(CombinedCourseOffering(combined_course_id=combined.id, program_id=level.program_id, level_id=level.id))
    db.commit()


def test_empty_store(db):
    data = compile_generation_data(db)
    assert data.courses == []
    assert data.staff == []
    assert data.venues == []


def test_regular_courses_list_their_own_program(db):
    _seed(db)
    data = compile_generation_data(db)

    assert [c.course_code for c in data.courses] == ["GEO101", "PHY101"]
    by_code = {c.course_code: c for c in data.courses}
    assert by_code["PHY101"].offering_programs == ["Physics"]
    assert by_code["PHY101"].students_count == 100
    assert by_code["PHY101"].level == 1
    assert by_code["GEO101"].offering_programs == ["Geology"]


def test_combined_course_merges_offering_programs(db):
    seeded = _seed(db)
    # The base level repeated as an offering is only counted once.
    _combine(db, seeded["mechanics"], seeded["geology_one"], seeded["physics_one"])

    data = compile_generation_data(db)

    assert len(data.courses) == 2
    mechanics = next(c for c in data.courses if c.course_code == "PHY101")
    assert mechanics.offering_programs == ["Physics", "Geology"]
    assert mechanics.students_count == 140
    assert mechanics.exam_type == "CBT"


def test_staff_and_venues_are_resolved(db):
    _seed(db)
    data = compile_generation_data(db)

    assert len(data.staff) == 1
    assert data.staff[0].college_name == "COLLEGE OF SCIENCE"
    assert data.staff[0].department_name == "Earth Sciences"
    assert [v.name for v in data.venues] == ["CBT Centre", "Lecture Theatre 1"]
