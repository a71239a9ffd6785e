from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.level import Level
from models.program import Program
from schemas.admin import AdminActionResult


logger = logging.getLogger(__name__)


def promote_students(db: Session) -> AdminActionResult:
    """Move every level's students up one level, program by program.

    Each level takes over the head count of the level below it, the highest
    level's students graduate, and Level 1 is refilled from the program's
    expected intake. Assumes a 100% promotion rate.
    """

    programs = db.execute(select(Program)).scalars().all()
    if not programs:
        return AdminActionResult(ok=False, message="No programs found to process.")

    levels_by_program: dict = defaultdict(list)
    for level in db.execute(select(Level)).scalars().all():
        levels_by_program[level.program_id].append(level)

    updated = 0
    for program in programs:
        levels = sorted(levels_by_program.get(program.id, []), key=lambda lv: lv.level, reverse=True)
        if not levels:
            continue

        # Walk top-down: each level inherits what the next one down held before this run.
        below_counts = [lv.students_count for lv in levels[1:]] + [0]
        for level, incoming in zip(levels, below_counts):
            level.students_count = int(incoming)
            updated += 1

        first = next((lv for lv in levels if lv.level == 1), None)
        if first is not None:
            first.students_count = int(program.expected_intake or 0)

    db.commit()
    logger.info("Promoted students across %d programs (%d levels updated)", len(programs), updated)
    return AdminActionResult(ok=True, updated=updated, message="Student promotion process completed successfully!")
