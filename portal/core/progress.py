# portal/core/progress.py
"""
Attendance statistics for the student dashboard.

Everything here is pure: callers fetch sessions and attendance rows, these
functions only reshape and count them. Two rules hold throughout:

* ``percent`` is ``present / total * 100`` rounded half up to one decimal, and
  0 when there are no sessions. The overall percent is recomputed from summed
  counts and is never an average of per-course percents.
* A past session without an attendance row is "Missed" for display only
  (``classify_status``). ``aggregate_course`` never counts it as absent.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, List, Optional, Sequence


class AttendanceStatus(str, Enum):
    PRESENT = "P"
    ABSENT = "A"

    @classmethod
    def parse(cls, value) -> Optional["AttendanceStatus"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        if text in ("p", "present"):
            return cls.PRESENT
        if text in ("a", "absent"):
            return cls.ABSENT
        return None


class ClassStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    MISSED = "Missed"
    NOT_MARKED = "NotMarked"


@dataclass(frozen=True)
class SessionRow:
    id: int
    class_name: str
    level: str
    date: date
    time: str = ""
    meet_link: Optional[str] = None
    coach: str = ""


@dataclass(frozen=True)
class AttendanceRow:
    id: int
    class_list_id: int
    student_id: int
    status: str
    attendance_date: Optional[date] = None
    created_at: Optional[object] = None


@dataclass
class CourseStats:
    title: str
    level: str
    total: int = 0
    present: int = 0
    absent: int = 0
    percent: float = 0
    classes: List[SessionRow] = field(default_factory=list)


@dataclass
class OverallStats:
    total: int = 0
    present: int = 0
    absent: int = 0
    percent: float = 0


def percent_of(present: int, total: int) -> float:
    if total <= 0:
        return 0
    # ties go up: 1/16 is 6.3, not the 6.2 that round() gives
    value = Decimal(present / total * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(value)


TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p")


def parse_time(text: Optional[str]) -> Optional[time]:
    if not text:
        return None
    cleaned = text.strip().upper()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).time()
        except ValueError:
            continue
    return None


def session_sort_key(session):
    """Orders by date, then clock time. Unreadable times go last for their day."""
    parsed = parse_time(session.time)
    if parsed is None:
        return (session.date, 1, time.min, session.time or "")
    return (session.date, 0, parsed, "")


def title_matches(title: str, class_name: Optional[str]) -> bool:
    if not class_name:
        return False
    return title.strip().lower() in class_name.lower()


def match_sessions(title: str, level: str, sessions: Iterable[SessionRow]) -> List[SessionRow]:
    seen = set()
    matched = []
    for session in sessions:
        if session.id in seen:
            continue
        if session.level != level or not title_matches(title, session.class_name):
            continue
        seen.add(session.id)
        matched.append(session)
    matched.sort(key=session_sort_key)
    return matched


def aggregate_course(
    title: str,
    level: str,
    sessions: Sequence[SessionRow],
    records: Iterable[AttendanceRow],
) -> CourseStats:
    session_ids = {s.id for s in sessions}
    present = 0
    absent = 0
    # duplicate rows for one session are counted as stored
    for record in records:
        if record.class_list_id not in session_ids:
            continue
        status = AttendanceStatus.parse(record.status)
        if status is AttendanceStatus.PRESENT:
            present += 1
        elif status is AttendanceStatus.ABSENT:
            absent += 1

    total = len(sessions)
    return CourseStats(
        title=title,
        level=level,
        total=total,
        present=present,
        absent=absent,
        percent=percent_of(present, total),
        classes=list(sessions),
    )


def classify_status(record: Optional[AttendanceRow], session_date: date, today: Optional[date] = None) -> ClassStatus:
    if record is not None:
        status = AttendanceStatus.parse(record.status)
        if status is AttendanceStatus.PRESENT:
            return ClassStatus.PRESENT
        if status is AttendanceStatus.ABSENT:
            return ClassStatus.ABSENT

    today = today or date.today()
    if session_date < today:
        return ClassStatus.MISSED
    return ClassStatus.NOT_MARKED


def summarize(course_stats: Iterable[CourseStats]) -> OverallStats:
    total = present = absent = 0
    for stats in course_stats:
        total += stats.total
        present += stats.present
        absent += stats.absent
    return OverallStats(total=total, present=present, absent=absent, percent=percent_of(present, total))
