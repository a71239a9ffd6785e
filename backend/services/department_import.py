from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from models.college import College
from models.department import Department
from schemas.admin import AdminActionResult
from schemas.department import DepartmentImportRow
from services.import_report import summarize_rows
from services.text_format import normalize_name, title_case


logger = logging.getLogger(__name__)


def import_departments(db: Session, rows: list[dict[str, Any]]) -> AdminActionResult:
    """Create departments from parsed spreadsheet rows (`name`, `college_name`).

    Rows are checked one by one; bad rows are reported and skipped while the
    valid ones are committed together.
    """

    if not rows:
        return AdminActionResult(ok=False, message="No department data provided.")

    colleges = {normalize_name(name): college_id for college_id, name in db.execute(select(College.id, College.name)).all()}
    existing_names = {normalize_name(name) for (name,) in db.execute(select(Department.name)).all()}

    created = 0
    errors: list[str] = []

    for raw in rows:
        try:
            row = DepartmentImportRow.model_validate(raw)
        except ValidationError:
            label = raw.get("name") if isinstance(raw, dict) else None
            errors.append(f"Row with name {label or 'N/A'}: Invalid data format.")
            continue

        name = row.name.strip()
        if normalize_name(name) in existing_names:
            errors.append(f"Row with name {name}: Department already exists.")
            continue

        college_id = colleges.get(normalize_name(row.college_name))
        if college_id is None:
            errors.append(f'Row with name {name}: College "{row.college_name}" not found.')
            continue

        db.add(Department(name=title_case(" ".join(name.split())), college_id=college_id))
        existing_names.add(normalize_name(name))
        created += 1

    if created:
        db.commit()

    if errors:
        logger.warning("Department import: %d rows failed", len(errors))

    return AdminActionResult(ok=created > 0, created=created, message=summarize_rows("departments", created, errors))
