from __future__ import annotations

MAX_REPORTED_ERRORS = 3


def summarize_rows(noun: str, created: int, errors: list[str]) -> str:
    """`"{n} {noun} imported successfully."` plus the first few row errors."""

    message = f"{created} {noun} imported successfully."
    if errors:
        shown = "; ".join(errors[:MAX_REPORTED_ERRORS])
        more = "..." if len(errors) > MAX_REPORTED_ERRORS else ""
        message += f" {len(errors)} rows failed. Errors: {shown}{more}"
    return message
