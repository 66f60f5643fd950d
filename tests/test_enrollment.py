from __future__ import annotations

import pytest

from portal.core.enrollment import Enrollment, parse_courses, parse_enrollments, parse_levels


@pytest.mark.parametrize(
    "raw, expected",
    [
        (["Math ", " Science", ""], ["Math", "Science"]),
        ('["Math", " Art "]', ["Math", "Art"]),
        ("Math, Science,,", ["Math", "Science"]),
        ("Math", ["Math"]),
        (42, ["42"]),
        (None, []),
        ("", []),
    ],
)
def test_parse_courses_branches(raw, expected):
    assert parse_courses(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (["A1", " B2 "], ["A1", "B2"]),
        ('["A1", "B2"]', ["A1", "B2"]),
        ("A1, B2", ["A1", "B2"]),
        ("A1", ["A1"]),
        (3, ["3"]),
        (None, []),
    ],
)
def test_parse_levels_branches(raw, expected):
    assert parse_levels(raw) == expected


def test_malformed_json_falls_back_to_comma_split():
    assert parse_courses('["Math", "Art"') == ['["Math"', '"Art"']


def test_json_object_is_not_a_list():
    assert parse_courses('{"a": 1}') == ['{"a": 1}']


def test_pairs_delimited_courses_and_levels():
    assert parse_enrollments("Math, Science", "A,B") == [
        Enrollment("Math", "A"),
        Enrollment("Science", "B"),
    ]


def test_structured_course_uses_first_level_as_fallback():
    assert parse_enrollments('["Math"]', "B1") == [Enrollment("Math", "B1")]


def test_single_course_without_level():
    assert parse_enrollments("Math", None) == [Enrollment("Math", "Not specified")]


def test_more_courses_than_levels_reuses_first_level():
    assert parse_enrollments(["Math", "Art", "Music"], '["A1", "B2"]') == [
        Enrollment("Math", "A1"),
        Enrollment("Art", "B2"),
        Enrollment("Music", "A1"),
    ]


def test_custom_default_level():
    assert parse_enrollments(["Math"], [], default_level="Beginner") == [Enrollment("Math", "Beginner")]


def test_levels_without_courses():
    assert parse_enrollments(None, "A1") == []


def test_null_entries_are_blank_not_titles():
    assert parse_courses('["Math", null]') == ["Math"]
    assert parse_courses([None, "Art"]) == ["Art"]
    assert parse_levels('["A1", null, "B2"]') == ["A1", "", "B2"]
    assert parse_enrollments('["Math", null, "Art"]', '["A1", "B2"]') == [
        Enrollment(title="Math", level="A1"),
        Enrollment(title="Art", level="B2"),
    ]
