from __future__ import annotations

from datetime import date, timedelta

import pytest

from portal.core.progress import (
    AttendanceRow,
    AttendanceStatus,
    ClassStatus,
    CourseStats,
    SessionRow,
    aggregate_course,
    classify_status,
    match_sessions,
    percent_of,
    summarize,
)

TODAY = date(2026, 3, 10)


def session(id: int, day: date, class_name: str = "Math", level: str = "A1", time: str = "10:00") -> SessionRow:
    return SessionRow(id=id, class_name=class_name, level=level, date=day, time=time)


def record(id: int, class_id: int, status: str = "P", student_id: int = 1) -> AttendanceRow:
    return AttendanceRow(id=id, class_list_id=class_id, student_id=student_id, status=status)


@pytest.mark.parametrize(
    "present, total, expected",
    [(0, 1, 0.0), (1, 3, 33.3), (2, 3, 66.7), (7, 7, 100.0), (5, 8, 62.5), (1, 16, 6.3), (5, 16, 31.3)],
)
def test_percent_is_rounded_half_up_to_one_decimal(present, total, expected):
    assert percent_of(present, total) == expected


def test_percent_of_zero_total_is_zero():
    assert percent_of(0, 0) == 0
    assert percent_of(3, 0) == 0


def test_status_parse_accepts_codes_and_words():
    assert AttendanceStatus.parse("P") is AttendanceStatus.PRESENT
    assert AttendanceStatus.parse("absent") is AttendanceStatus.ABSENT
    assert AttendanceStatus.parse("late") is None
    assert AttendanceStatus.parse(None) is None


def test_match_sessions_filters_sorts_and_dedupes():
    sessions = [
        session(3, TODAY, time="18:00"),
        session(1, TODAY - timedelta(days=1)),
        session(2, TODAY, time="09:00", class_name="ADVANCED MATH"),
        session(4, TODAY, level="B2"),
        session(5, TODAY, class_name="Science"),
        session(1, TODAY - timedelta(days=1)),
    ]
    matched = match_sessions("math", "A1", sessions)
    assert [s.id for s in matched] == [1, 2, 3]


def test_match_sessions_orders_by_clock_time_not_text():
    sessions = [session(1, TODAY, time="10:00"), session(2, TODAY, time="9:00")]
    assert [s.id for s in match_sessions("Math", "A1", sessions)] == [2, 1]


def test_match_sessions_reads_twelve_hour_times_and_puts_unreadable_last():
    sessions = [
        session(1, TODAY, time="after lunch"),
        session(2, TODAY, time="6:30 PM"),
        session(3, TODAY, time="18:00"),
        session(4, TODAY, time="7:15am"),
    ]
    assert [s.id for s in match_sessions("Math", "A1", sessions)] == [4, 3, 2, 1]


def test_match_sessions_level_is_exact():
    assert match_sessions("Math", "a1", [session(1, TODAY)]) == []


def test_aggregate_counts_only_course_sessions():
    sessions = [session(1, TODAY), session(2, TODAY), session(3, TODAY), session(4, TODAY)]
    records = [record(1, 1, "P"), record(2, 2, "A"), record(3, 99, "P")]
    stats = aggregate_course("Math", "A1", sessions, records)
    assert (stats.total, stats.present, stats.absent, stats.percent) == (4, 1, 1, 25.0)


def test_aggregate_never_infers_absence_from_missing_records():
    sessions = [session(1, TODAY - timedelta(days=5)), session(2, TODAY - timedelta(days=4))]
    stats = aggregate_course("Math", "A1", sessions, [])
    assert stats.absent == 0
    assert stats.percent == 0


def test_aggregate_counts_duplicate_records_as_stored():
    sessions = [session(1, TODAY), session(2, TODAY)]
    stats = aggregate_course("Math", "A1", sessions, [record(1, 1), record(2, 1)])
    assert stats.present == 2
    assert stats.percent == 100.0


def test_aggregate_without_sessions():
    stats = aggregate_course("Math", "A1", [], [record(1, 1)])
    assert (stats.total, stats.present, stats.percent) == (0, 0, 0)


def test_classify_status():
    yesterday = TODAY - timedelta(days=1)
    tomorrow = TODAY + timedelta(days=1)
    assert classify_status(record(1, 1, "P"), yesterday, TODAY) is ClassStatus.PRESENT
    assert classify_status(record(1, 1, "A"), tomorrow, TODAY) is ClassStatus.ABSENT
    assert classify_status(None, yesterday, TODAY) is ClassStatus.MISSED
    assert classify_status(None, tomorrow, TODAY) is ClassStatus.NOT_MARKED
    assert classify_status(None, TODAY, TODAY) is ClassStatus.NOT_MARKED


def test_overall_percent_is_not_an_average_of_course_percents():
    small = CourseStats(title="Art", level="A1", total=2, present=2, absent=0, percent=100.0)
    large = CourseStats(title="Math", level="A1", total=8, present=2, absent=3, percent=25.0)
    overall = summarize([small, large])
    assert (overall.total, overall.present, overall.absent) == (10, 4, 3)
    assert overall.percent == 40.0
    assert overall.percent != round((small.percent + large.percent) / 2, 1)


def test_summarize_empty():
    overall = summarize([])
    assert (overall.total, overall.present, overall.absent, overall.percent) == (0, 0, 0, 0)


def test_single_course_student_scenario():
    sessions = [session(i, TODAY + timedelta(days=d)) for i, d in ((1, -3), (2, -2), (3, -1), (4, 1))]
    records = [record(1, 1, "P"), record(2, 2, "P")]

    stats = aggregate_course("Math", "A1", match_sessions("Math", "A1", sessions), records)
    assert (stats.total, stats.present, stats.absent, stats.percent) == (4, 2, 0, 50.0)

    overall = summarize([stats])
    assert (overall.total, overall.present, overall.absent, overall.percent) == (4, 2, 0, 50.0)

    by_id = {r.class_list_id: r for r in records}
    statuses = [classify_status(by_id.get(s.id), s.date, TODAY) for s in sessions]
    assert statuses == [ClassStatus.PRESENT, ClassStatus.PRESENT, ClassStatus.MISSED, ClassStatus.NOT_MARKED]
