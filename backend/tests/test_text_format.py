from __future__ import annotations

import pytest

from services.text_format import extract_level_number, fallback_college_code, normalize_name, title_case


def test_normalize_name_ignores_case_and_spacing():
    keys = {normalize_name(n) for n in ("COLLEGE OF SCIENCE", "  college of   science ", "College Of Science")}
    assert keys == {"collegeofscience"}


def test_normalize_name_strips_punctuation():
    assert normalize_name("B.Sc. (Hons) Computer-Science") == "bschonscomputerscience"
    assert normalize_name(None) == ""


def test_title_case():
    assert title_case("intro to CS") == "Intro To Cs"
    assert title_case("COMPUTER SCIENCE") == "Computer Science"
    assert title_case("") == ""


@pytest.mark.parametrize(
    "name, expected",
    [
        ("COLLEGE OF NATURAL AND APPLIED SCIENCES", "NAAS"),
        ("College of Science", "S"),
        ("School Of Engineering And Technology Studies", "SOEAT"),
        ("COLLEGE OF", "N/A"),
        ("", "N/A"),
    ],
)
def test_fallback_college_code(name, expected):
    assert fallback_college_code(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("100 Level", 1),
        ("Level 2", 2),
        ("400L", 4),
        ("Level 1 (Introductory)", 1),
        ("Final Year", 1),
        ("", 1),
    ],
)
def test_extract_level_number(name, expected):
    assert extract_level_number(name) == expected
