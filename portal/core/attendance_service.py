# portal/core/attendance_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from portal.core.progress import AttendanceStatus
from portal.crud import attendance as crud_attendance

logger = logging.getLogger(__name__)


def with_class_id(meet_link: str, class_id: int) -> str:
    separator = "&" if "?" in meet_link else "?"
    return f"{meet_link}{separator}cid={class_id}"


def record_attendance_quietly(
    session_factory,
    class_id: int,
    student_id: int,
    status: AttendanceStatus = AttendanceStatus.PRESENT,
):
    """
    Records attendance without anyone waiting on the result.

    Runs as a background task after the response is sent, on its own session.
    Failures are logged and dropped: the caller has already been given the
    meeting link and is not told about them.
    """
    db = session_factory()
    try:
        crud_attendance.record_attendance(db, class_id, student_id, status)
        logger.info(f"[Attendance] Recorded {status.value} for class_id={class_id}, student_id={student_id}")
    except SQLAlchemyError as e:
        logger.error(f"[Attendance] Background record failed for class_id={class_id}, student_id={student_id}: {e}")
    finally:
        db.close()
