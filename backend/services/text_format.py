from __future__ import annotations

import re


_NON_ALNUM = re.compile(r"[^a-z0-9]")
_DIGITS = re.compile(r"\d+")

COLLEGE_PREFIX = "COLLEGE OF"
FALLBACK_CODE_LENGTH = 5


def normalize_name(name: str | None) -> str:
    """Comparison key for names: lower-cased with everything but [a-z0-9] removed."""

    return _NON_ALNUM.sub("", (name or "").lower())


def title_case(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in value.lower().split(" "))


def fallback_college_code(name: str | None) -> str:
    """Build a short college code from its name.

    "College of Natural Sciences" -> "NS". Returns "N/A" when nothing is left.
    """

    upper = (name or "").upper().strip()
    if upper.startswith(COLLEGE_PREFIX):
        upper = upper[len(COLLEGE_PREFIX):]
    code = "".join(word[0] for word in upper.split())[:FALLBACK_CODE_LENGTH]
    return code or "N/A"


def extract_level_number(name: str | None) -> int:
    # "Level 2" -> 2, "100 Level" -> 1, "400L" -> 4, no digits -> 1.
    match = _DIGITS.search(name or "")
    if match is None:
        return 1
    n = int(match.group(0))
    if n <= 7:
        return n
    return n // 100
