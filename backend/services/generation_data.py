from __future__ import annotations

import logging
import uuid
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.college import College
from models.combined_course import CombinedCourse
from models.combined_course_offering import CombinedCourseOffering
from models.course import Course
from models.department import Department
from models.level import Level
from models.program import Program
from models.staff import Staff
from models.venue import Venue
from schemas.generation import GenerationCourse, GenerationData, GenerationStaff
from schemas.venue import VenueOut


logger = logging.getLogger(__name__)

UNKNOWN_PROGRAM = "Unknown Program"


def _merge_unique(first: list[str], extra: list[str]) -> list[str]:
    return list(dict.fromkeys([*first, *extra]))


def compile_generation_data(db: Session) -> GenerationData:
    """Snapshot of everything the timetable generator consumes.

    Each course lists the programs taking it. A combined course adds the
    programs of its offerings to its base course rather than appearing twice,
    and its students_count covers every distinct level involved.
    """

    program_names: dict[uuid.UUID, str] = {
        pid: name for pid, name in db.execute(select(Program.id, Program.name)).all()
    }
    levels: dict[uuid.UUID, Level] = {lv.id: lv for lv in db.execute(select(Level)).scalars().all()}

    def _program_name(level_id: uuid.UUID) -> str:
        level = levels.get(level_id)
        if level is None:
            return UNKNOWN_PROGRAM
        return program_names.get(level.program_id, UNKNOWN_PROGRAM)

    offering_levels: dict[uuid.UUID, list[uuid.UUID]] = defaultdict(list)
    for base_course_id, level_id in db.execute(
        select(CombinedCourse.base_course_id, CombinedCourseOffering.level_id)
        .join(CombinedCourseOffering, CombinedCourseOffering.combined_course_id == CombinedCourse.id)
        .order_by(CombinedCourseOffering.created_at.asc())
    ).all():
        offering_levels[base_course_id].append(level_id)

    courses: list[GenerationCourse] = []
    for course in db.execute(select(Course).order_by(Course.course_code.asc())).scalars().all():
        extra_levels = offering_levels.get(course.id, [])
        level_ids = list(dict.fromkeys([course.level_id, *extra_levels]))
        own_level = levels.get(course.level_id)
        courses.append(
            GenerationCourse(
                id=course.id,
                course_code=course.course_code,
                course_name=course.course_name,
                credit_unit=course.credit_unit,
                exam_type=course.exam_type,
                level_id=course.level_id,
                program_id=course.program_id,
                level=own_level.level if own_level is not None else 0,
                students_count=sum(levels[lid].students_count for lid in level_ids if lid in levels),
                offering_programs=_merge_unique(
                    [_program_name(course.level_id)],
                    [_program_name(lid) for lid in extra_levels],
                ),
            )
        )

    college_names = {cid: name for cid, name in db.execute(select(College.id, College.name)).all()}
    department_names = {did: name for did, name in db.execute(select(Department.id, Department.name)).all()}
    staff = [
        GenerationStaff(
            id=s.id,
            name=s.name,
            email=s.email,
            phone=s.phone,
            position=s.position,
            college_id=s.college_id,
            department_id=s.department_id,
            college_name=college_names.get(s.college_id),
            department_name=department_names.get(s.department_id),
        )
        for s in db.execute(select(Staff).order_by(Staff.name.asc())).scalars().all()
    ]

    venues = [
        VenueOut.model_validate(v)
        for v in db.execute(select(Venue).order_by(Venue.name.asc())).scalars().all()
    ]

    logger.info(
        "Compiled generation data: %d courses, %d staff, %d venues",
        len(courses),
        len(staff),
        len(venues),
    )
    return GenerationData(courses=courses, staff=staff, venues=venues)
