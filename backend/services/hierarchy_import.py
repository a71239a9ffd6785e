from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import settings
from models.college import College
from models.course import EXAM_TYPES, Course
from models.department import Department
from models.level import Level
from models.program import Program
from schemas.importer import AnalyzedEntity, EntityOutcome, ImportResult
from services.text_format import (
    extract_level_number,
    fallback_college_code,
    normalize_name,
    title_case,
)


logger = logging.getLogger(__name__)


# Ancestors must be resolved before any dependent type is looked at.
PASS_ORDER: tuple[str, ...] = ("College", "Department", "Program", "Level", "Course")

MAX_CODE_LENGTH = 10
MIN_LEVEL = 1
MAX_LEVEL = 7
FALLBACK_COURSE_CODE = "N/A"
DEFAULT_CREDIT_UNIT = 3
DEFAULT_EXAM_TYPE = "Written"


class ReconcileError(Exception):
    """Per-item failure. Collected; the dry pass goes on but nothing is committed."""


class ReconcileAbort(ReconcileError):
    """Per-item failure that stops the dry pass immediately."""


@dataclass
class ReconcileContext:
    """State for one reconciliation call. Built fresh per call, never shared."""

    # batch-local id -> persistent id
    batch_ids: dict[str, uuid.UUID] = field(default_factory=dict)
    # persistent id -> entity type, for ids resolved during this call
    types: dict[uuid.UUID, str] = field(default_factory=dict)

    # Dedup indexes over existing rows plus rows staged by this call.
    colleges: dict[str, uuid.UUID] = field(default_factory=dict)
    departments: dict[tuple[str, uuid.UUID], uuid.UUID] = field(default_factory=dict)
    levels: dict[tuple[uuid.UUID, int], uuid.UUID] = field(default_factory=dict)
    courses: dict[tuple[uuid.UUID, str], uuid.UUID] = field(default_factory=dict)
    level_programs: dict[uuid.UUID, uuid.UUID] = field(default_factory=dict)

    staged: dict[str, list[Any]] = field(default_factory=lambda: defaultdict(list))
    outcomes: list[EntityOutcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, db: Session) -> ReconcileContext:
        # One round trip per entity type, regardless of batch size.
        ctx = cls()
        for college_id, name in db.execute(select(College.id, College.name)).all():
            ctx.colleges.setdefault(normalize_name(name), college_id)
        for dept_id, name, college_id in db.execute(
            select(Department.id, Department.name, Department.college_id)
        ).all():
            ctx.departments.setdefault((normalize_name(name), college_id), dept_id)
        for level_id, program_id, level in db.execute(select(Level.id, Level.program_id, Level.level)).all():
            ctx.levels.setdefault((program_id, int(level)), level_id)
            ctx.level_programs[level_id] = program_id
        for course_id, program_id, code in db.execute(
            select(Course.id, Course.program_id, Course.course_code)
        ).all():
            ctx.courses.setdefault((program_id, str(code).upper()), course_id)
        return ctx

    @property
    def created_count(self) -> int:
        return sum(len(rows) for rows in self.staged.values())

    def stage(self, entity_type: str, row: Any) -> uuid.UUID:
        row.id = uuid.uuid4()
        self.staged[entity_type].append(row)
        return row.id

    def resolved(self, entity: AnalyzedEntity, persisted_id: uuid.UUID, *, created: bool) -> None:
        self.batch_ids[entity.id] = persisted_id
        self.types[persisted_id] = entity.type
        self.outcomes.append(
            EntityOutcome(
                id=entity.id,
                type=entity.type,
                status="created" if created else "existing",
                persisted_id=persisted_id,
            )
        )

    def failed(self, entity: AnalyzedEntity, reason: str) -> None:
        self.errors.append(reason)
        self.outcomes.append(EntityOutcome(id=entity.id, type=entity.type, status="failed", reason=reason))

    def parent_of(self, entity: AnalyzedEntity) -> tuple[uuid.UUID | None, str | None]:
        if not entity.parent_id:
            return None, None
        parent_id = self.batch_ids.get(entity.parent_id)
        if parent_id is None:
            return None, None
        return parent_id, self.types.get(parent_id)


def _int_property(entity: AnalyzedEntity, key: str, default: int, *, minimum: int = 0, maximum: int | None = None) -> int:
    raw = entity.properties.get(key)
    if raw is None or raw == "":
        return default
    # bool is an int subclass and int() truncates floats; neither is a count.
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ReconcileError(f'{entity.type} "{entity.name}" has an invalid {key}: {raw!r}.')
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ReconcileError(f'{entity.type} "{entity.name}" has an invalid {key}: {raw!r}.')
    if value < minimum or (maximum is not None and value > maximum):
        raise ReconcileError(f'{entity.type} "{entity.name}" has an out-of-range {key}: {value}.')
    return value


def _get_or_stage_college(ctx: ReconcileContext, name: str, code: str | None) -> tuple[uuid.UUID, bool]:
    key = normalize_name(name)
    existing = ctx.colleges.get(key)
    if existing is not None:
        return existing, False
    code = (code or fallback_college_code(name)).strip()[:MAX_CODE_LENGTH] or "N/A"
    college_id = ctx.stage("College", College(name=name, code=code))
    ctx.colleges[key] = college_id
    return college_id, True


def _get_or_stage_department(ctx: ReconcileContext, name: str, college_id: uuid.UUID) -> tuple[uuid.UUID, bool]:
    key = (normalize_name(name), college_id)
    existing = ctx.departments.get(key)
    if existing is not None:
        return existing, False
    dept_id = ctx.stage("Department", Department(name=name, college_id=college_id))
    ctx.departments[key] = dept_id
    return dept_id, True


def _resolve_college(ctx: ReconcileContext, entity: AnalyzedEntity) -> tuple[uuid.UUID, bool]:
    code = entity.properties.get("code")
    return _get_or_stage_college(ctx, entity.name.upper(), str(code) if code else None)


def _resolve_department(ctx: ReconcileContext, entity: AnalyzedEntity) -> tuple[uuid.UUID, bool]:
    parent_id, parent_type = ctx.parent_of(entity)
    if parent_id is None or parent_type != "College":
        # Departments are never given a fabricated College.
        raise ReconcileError(f'Department "{entity.name}" is missing a valid College parent.')
    return _get_or_stage_department(ctx, title_case(entity.name), parent_id)


def _resolve_program(ctx: ReconcileContext, entity: AnalyzedEntity) -> tuple[uuid.UUID, bool]:
    name = title_case(entity.name)
    max_level = _int_property(
        entity, "max_level", settings.default_max_level, minimum=MIN_LEVEL, maximum=MAX_LEVEL
    )

    parent_id, parent_type = ctx.parent_of(entity)
    if parent_type == "Department":
        department_id = parent_id
    else:
        if parent_type == "College":
            college_id = parent_id
        else:
            college_name = f"COLLEGE OF {name}"
            college_id, _ = _get_or_stage_college(ctx, college_name, fallback_college_code(college_name))
        department_id, _ = _get_or_stage_department(ctx, f"Department of {name}", college_id)
        logger.info("Program %r had no Department parent; attached to department_id=%s", name, department_id)

    program_id = ctx.stage("Program", Program(name=name, department_id=department_id, max_level=max_level))
    return program_id, True


def _resolve_level(ctx: ReconcileContext, entity: AnalyzedEntity) -> tuple[uuid.UUID, bool]:
    parent_id, parent_type = ctx.parent_of(entity)
    if parent_id is None or parent_type != "Program":
        raise ReconcileAbort(f'Level "{entity.name}" is missing a valid Program parent.')

    level_number = extract_level_number(entity.name)
    if level_number < MIN_LEVEL or level_number > MAX_LEVEL:
        raise ReconcileAbort(f'Level "{entity.name}" does not map to a level between {MIN_LEVEL} and {MAX_LEVEL}.')

    key = (parent_id, level_number)
    existing = ctx.levels.get(key)
    if existing is not None:
        return existing, False

    students_count = _int_property(entity, "students_count", 0)
    level_id = ctx.stage(
        "Level",
        Level(program_id=parent_id, level=level_number, students_count=students_count),
    )
    ctx.levels[key] = level_id
    ctx.level_programs[level_id] = parent_id
    return level_id, True


def _resolve_course(ctx: ReconcileContext, entity: AnalyzedEntity) -> tuple[uuid.UUID, bool]:
    parent_id, parent_type = ctx.parent_of(entity)
    if parent_id is None or parent_type != "Level":
        raise ReconcileAbort(f'Course "{entity.name}" is missing a valid Level parent.')

    program_id = ctx.level_programs.get(parent_id)
    if program_id is None:
        raise ReconcileAbort(f'Course "{entity.name}" belongs to a Level with no Program.')

    course_code = str(entity.properties.get("course_code") or FALLBACK_COURSE_CODE).strip().upper()
    course_code = course_code or FALLBACK_COURSE_CODE

    # Courses without a code can't be told apart, so they are always new.
    key = (program_id, course_code)
    if course_code != FALLBACK_COURSE_CODE:
        existing = ctx.courses.get(key)
        if existing is not None:
            return existing, False

    raw_exam_type = str(entity.properties.get("exam_type") or DEFAULT_EXAM_TYPE).strip()
    exam_type = next((t for t in EXAM_TYPES if t.lower() == raw_exam_type.lower()), None)
    if exam_type is None:
        raise ReconcileError(f'Course "{entity.name}" has an invalid exam_type: {raw_exam_type!r}.')

    credit_unit = _int_property(entity, "credit_unit", DEFAULT_CREDIT_UNIT)
    course_id = ctx.stage(
        "Course",
        Course(
            level_id=parent_id,
            program_id=program_id,
            course_code=course_code,
            course_name=title_case(entity.name),
            credit_unit=credit_unit,
            exam_type=exam_type,
        ),
    )
    if course_code != FALLBACK_COURSE_CODE:
        ctx.courses[key] = course_id
    return course_id, True


_RESOLVERS: dict[str, Callable[[ReconcileContext, AnalyzedEntity], tuple[uuid.UUID, bool]]] = {
    "College": _resolve_college,
    "Department": _resolve_department,
    "Program": _resolve_program,
    "Level": _resolve_level,
    "Course": _resolve_course,
}


def _group_by_type(entities: Iterable[AnalyzedEntity]) -> dict[str, list[AnalyzedEntity]]:
    groups: dict[str, list[AnalyzedEntity]] = defaultdict(list)
    for entity in entities:
        groups[entity.type].append(entity)
    return groups


def _dry_pass(ctx: ReconcileContext, entities: list[AnalyzedEntity]) -> None:
    groups = _group_by_type(entities)
    for entity_type in PASS_ORDER:
        resolve = _RESOLVERS[entity_type]
        for entity in groups.get(entity_type, []):
            try:
                persisted_id, created = resolve(ctx, entity)
            except ReconcileAbort as exc:
                ctx.failed(entity, str(exc))
                logger.warning("Reconciliation aborted at %s id=%r: %s", entity.type, entity.id, exc)
                return
            except ReconcileError as exc:
                ctx.failed(entity, str(exc))
                logger.warning("Reconciliation failed for %s id=%r: %s", entity.type, entity.id, exc)
                continue
            ctx.resolved(entity, persisted_id, created=created)


def _commit(db: Session, ctx: ReconcileContext) -> None:
    # Flush per type so parents are inserted before children; commit once.
    for entity_type in PASS_ORDER:
        rows = ctx.staged.get(entity_type) or []
        if not rows:
            continue
        db.add_all(rows)
        db.flush()
    db.commit()


def reconcile_entities(db: Session, entities: list[AnalyzedEntity]) -> ImportResult:
    """Resolve a batch of analyzed entities against stored data and persist it.

    Entities are matched to existing Colleges/Departments/Levels/Courses where
    possible, missing ancestors of orphaned Programs are fabricated, and every
    new row is written in a single transaction. Any per-item error means
    nothing is written. Errors are reported in the result, never raised.

    On failure, `outcomes` still describe how each processed entity resolved
    during the dry pass; none of the "created" rows exist in the database.
    """

    if not entities:
        return ImportResult(success=False, message="No entities to save.")

    logger.info("Reconciling %d analyzed entities", len(entities))

    try:
        ctx = ReconcileContext.load(db)
        _dry_pass(ctx, entities)

        if ctx.errors:
            message = f"Save failed. {len(ctx.errors)} errors occurred. First error: {ctx.errors[0]}"
            logger.warning("Reconciliation rejected: %s", message)
            return ImportResult(success=False, message=message, outcomes=ctx.outcomes)

        created = ctx.created_count
        _commit(db, ctx)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Reconciliation failed while talking to the database")
        detail = getattr(exc, "orig", None) or exc
        return ImportResult(success=False, message=f"An unexpected error occurred: {detail}")
    except Exception as exc:
        db.rollback()
        logger.exception("Reconciliation crashed")
        return ImportResult(success=False, message=f"An unexpected error occurred: {exc}")

    logger.info("Reconciliation committed %d new records", created)
    return ImportResult(
        success=True,
        message=f"Successfully created {created} new records.",
        created=created,
        outcomes=ctx.outcomes,
    )
