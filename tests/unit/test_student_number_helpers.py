"""Unit tests for student number helpers (pure logic, no DB)."""

import re
from unittest.mock import patch

import pytest

from registrar.core.exceptions import InvalidCourseIdError, InvalidSchoolYearError
from registrar.services.student_number_service import (
    build_counter_key,
    draw_sequence,
    format_student_number,
    normalize_course_code,
    parse_start_year,
    resolve_course_code,
)

STUDENT_NUMBER_RE = re.compile(r"^\d{4}-[A-Z0-9]+-\d{5}$")


def test_parse_start_year():
    assert parse_start_year("2024-2025") == "2024"


def test_parse_start_year_strips_whitespace():
    assert parse_start_year(" 2030-2031 ") == "2030"


@pytest.mark.parametrize("value", ["", "2024", "24-25", "2024/2025", "2024-25", "abcd-efgh", "2024-2025-2026"])
def test_parse_start_year_rejects_malformed(value):
    with pytest.raises(InvalidSchoolYearError) as exc_info:
        parse_start_year(value)
    assert "Invalid school year format" in str(exc_info.value)


def test_invalid_school_year_is_value_error():
    with pytest.raises(ValueError):
        parse_start_year("bad")


def test_resolve_known_course():
    assert resolve_course_code(101) == "BEED"


def test_resolve_course_strips_separators():
    assert resolve_course_code(102) == "BSEDENGLISH"
    assert resolve_course_code(103) == "BSEDMATH"
    assert resolve_course_code(201) == "BSBAHRM"


def test_resolve_unknown_course_falls_back():
    assert resolve_course_code(999) == "COURSE999"


def test_normalize_course_code():
    assert normalize_course_code("bsit") == "BSIT"
    assert normalize_course_code("BSEd-English") == "BSEDENGLISH"


def test_build_counter_key():
    assert build_counter_key("BEED", "2024") == "student_BEED_2024"


def test_format_student_number_pads_to_five_digits():
    assert format_student_number("2024", "BEED", 7) == "2024-BEED-00007"
    assert format_student_number("2024", "BEED", 48213) == "2024-BEED-48213"


def test_random_sequence_in_range():
    for counter_value in range(1, 200):
        sequence = draw_sequence(counter_value, "random")
        assert 10000 <= sequence <= 99999


def test_random_sequence_bounds():
    with patch("registrar.services.student_number_service.secrets.randbelow", return_value=0):
        assert draw_sequence(1, "random") == 10000
    with patch("registrar.services.student_number_service.secrets.randbelow", return_value=89999):
        assert draw_sequence(1, "random") == 99999


def test_counter_sequence_uses_counter_value():
    assert draw_sequence(42, "counter") == 42


def test_counter_sequence_overflow():
    with pytest.raises(OverflowError):
        draw_sequence(100000, "counter")


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        draw_sequence(1, "sequential")


@pytest.mark.parametrize("course_id", [101, 102, 103, 201, 7, 999])
def test_formatted_numbers_match_pattern(course_id):
    number = format_student_number("2024", resolve_course_code(course_id), draw_sequence(1, "random"))
    assert STUDENT_NUMBER_RE.match(number)


@pytest.mark.parametrize("course_id", [0, -1, -101, True, "101"])
def test_resolve_course_rejects_non_positive_or_non_int(course_id):
    with pytest.raises(InvalidCourseIdError):
        resolve_course_code(course_id)


def test_negative_course_does_not_alias_positive_course():
    assert resolve_course_code(1) == "COURSE1"
    with pytest.raises(ValueError):
        resolve_course_code(-1)
