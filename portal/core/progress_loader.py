# portal/core/progress_loader.py
"""
Loads everything a progress view needs for one student.

Per-course fetches run concurrently and are joined before aggregation. A
failing fetch only zeroes the scope it covers. Nothing is returned once the
view's liveness reports it was torn down, so a stale load never overwrites a
newer one.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.core.config import settings
from portal.core.enrollment import Enrollment, parse_enrollments
from portal.core.exceptions import StoreError
from portal.core.progress import (
    AttendanceRow,
    ClassStatus,
    CourseStats,
    OverallStats,
    SessionRow,
    aggregate_course,
    classify_status,
    match_sessions,
    summarize,
)
from portal.crud import attendance as crud_attendance
from portal.crud import class_session as crud_sessions
from portal.crud import user as crud_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentRow:
    id: int
    email: str
    name: str = ""
    course: object = None
    level: object = None


@dataclass
class StudentContext:
    student_id: int
    email: str
    enrollments: List[Enrollment] = field(default_factory=list)

    @property
    def level(self) -> Optional[str]:
        return self.enrollments[0].level if self.enrollments else None


@dataclass
class ProgressReport:
    summary: OverallStats
    courses: List[CourseStats]


@dataclass
class TimelineEntry:
    session: SessionRow
    record: Optional[AttendanceRow]
    status: ClassStatus


class ProgressStore(Protocol):
    async def fetch_student(self, email: str) -> Optional[StudentRow]: ...

    async def fetch_sessions(self, title: str, level: str) -> List[SessionRow]: ...

    async def fetch_attendance(self, student_id: int, session_ids: Sequence[int]) -> List[AttendanceRow]: ...

    async def fetch_history(self, student_id: int, limit: int) -> List[AttendanceRow]: ...


class Liveness:
    """Tracks whether the view that started a load still wants its result."""

    def __init__(self):
        self._alive = True

    def tear_down(self):
        self._alive = False

    async def is_alive(self) -> bool:
        return self._alive


class RequestLiveness(Liveness):
    def __init__(self, request):
        super().__init__()
        self.request = request

    async def is_alive(self) -> bool:
        if not self._alive:
            return False
        if await self.request.is_disconnected():
            self.tear_down()
        return self._alive


class SqlProgressStore:
    """Runs each query in a worker thread on its own session."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    async def _run(self, fn, *args):
        def work():
            db = self.session_factory()
            try:
                return fn(db, *args)
            except SQLAlchemyError as e:
                raise StoreError(str(e)) from e
            finally:
                db.close()

        return await asyncio.to_thread(work)

    async def fetch_student(self, email: str) -> Optional[StudentRow]:
        def query(db, email):
            student = crud_user.get_student_by_email(db, email)
            if not student:
                return None
            return StudentRow(
                id=student.id,
                email=student.email,
                name=student.name or "",
                course=student.course,
                level=student.level,
            )

        return await self._run(query, email)

    async def fetch_sessions(self, title: str, level: str) -> List[SessionRow]:
        return await self._run(crud_sessions.get_sessions_for_course, title, level)

    async def fetch_attendance(self, student_id: int, session_ids: Sequence[int]) -> List[AttendanceRow]:
        return await self._run(crud_attendance.get_records_for_sessions, student_id, list(session_ids))

    async def fetch_history(self, student_id: int, limit: int) -> List[AttendanceRow]:
        return await self._run(crud_attendance.get_recent_records, student_id, limit)


async def load_context(store: ProgressStore, email: Optional[str]) -> Optional[StudentContext]:
    if not email:
        return None
    try:
        student = await store.fetch_student(email)
    except StoreError as e:
        logger.error(f"[Progress] Failed to fetch student {email}: {e}")
        return None
    if student is None:
        logger.warning(f"[Progress] No student row for {email}")
        return None

    enrollments = parse_enrollments(student.course, student.level, settings.DEFAULT_LEVEL)
    return StudentContext(student_id=student.id, email=student.email, enrollments=enrollments)


async def load_course_stats(store: ProgressStore, student_id: int, enrollment: Enrollment) -> CourseStats:
    title, level = enrollment.title, enrollment.level
    try:
        sessions = match_sessions(title, level, await store.fetch_sessions(title, level))
    except StoreError as e:
        logger.error(f"[Progress] Error fetching classes for {title} ({level}): {e}")
        return CourseStats(title=title, level=level)

    records: List[AttendanceRow] = []
    if sessions:
        try:
            records = await store.fetch_attendance(student_id, [s.id for s in sessions])
        except StoreError as e:
            # sessions are still known, only the marks are lost
            logger.error(f"[Progress] Error fetching attendance for {title} ({level}): {e}")

    return aggregate_course(title, level, sessions, records)


async def load_progress(
    store: ProgressStore,
    context: Optional[StudentContext],
    liveness: Optional[Liveness] = None,
) -> Optional[ProgressReport]:
    liveness = liveness or Liveness()

    if context is None:
        report = ProgressReport(summary=OverallStats(), courses=[])
    else:
        courses = await asyncio.gather(
            *(load_course_stats(store, context.student_id, e) for e in context.enrollments)
        )
        report = ProgressReport(summary=summarize(courses), courses=list(courses))

    if not await liveness.is_alive():
        logger.info("[Progress] View torn down before load finished, discarding result")
        return None
    return report


async def load_course_timeline(
    store: ProgressStore,
    context: StudentContext,
    title: str,
    level: str,
    today: Optional[date] = None,
    liveness: Optional[Liveness] = None,
) -> Optional[List[TimelineEntry]]:
    liveness = liveness or Liveness()
    try:
        sessions = match_sessions(title, level, await store.fetch_sessions(title, level))
        records = await store.fetch_attendance(context.student_id, [s.id for s in sessions]) if sessions else []
    except StoreError as e:
        logger.error(f"[Progress] Error loading course details for {title} ({level}): {e}")
        sessions, records = [], []

    # last row per session wins, like the attendance map the UI keys by class id
    by_session = {r.class_list_id: r for r in records}
    timeline = [
        TimelineEntry(
            session=s,
            record=by_session.get(s.id),
            status=classify_status(by_session.get(s.id), s.date, today),
        )
        for s in sessions
    ]

    if not await liveness.is_alive():
        return None
    return timeline


async def load_history(
    store: ProgressStore,
    context: StudentContext,
    limit: Optional[int] = None,
    liveness: Optional[Liveness] = None,
) -> Optional[List[AttendanceRow]]:
    liveness = liveness or Liveness()
    try:
        history = await store.fetch_history(context.student_id, limit or settings.HISTORY_LIMIT)
    except StoreError as e:
        logger.error(f"[Progress] Error fetching attendance history for {context.email}: {e}")
        history = []

    if not await liveness.is_alive():
        return None
    return history
