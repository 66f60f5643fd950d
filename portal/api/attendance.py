import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.api.deps import get_db, get_student_context
from portal.core.progress import AttendanceStatus
from portal.core.progress_loader import StudentContext
from portal.crud import attendance as crud_attendance
from portal.crud import class_session as crud_sessions
from portal.schemas.attendance import AttendanceRecordIn, MarkAbsentIn
from portal.schemas.progress import AttendanceOut

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_context(context: Optional[StudentContext]) -> StudentContext:
    if context is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return context


@router.post("/record", response_model=AttendanceOut)
def record_attendance(
    body: AttendanceRecordIn,
    db: Session = Depends(get_db),
    context: Optional[StudentContext] = Depends(get_student_context),
):
    context = _require_context(context)

    status = AttendanceStatus.PRESENT
    if body.status is not None:
        status = AttendanceStatus.parse(body.status)
        if status is None:
            raise HTTPException(status_code=400, detail="Status must be 'P' or 'A'")

    student_id = body.student_id or context.student_id
    if student_id != context.student_id:
        raise HTTPException(status_code=403, detail="Cannot record attendance for another student")

    if not crud_sessions.get_session(db, body.class_id):
        raise HTTPException(status_code=404, detail="Class not found")

    try:
        record = crud_attendance.record_attendance(db, body.class_id, student_id, status)
    except SQLAlchemyError as e:
        logger.error(f"[Attendance] Failed to record class_id={body.class_id}, student_id={student_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to record attendance")
    return record


@router.post("/mark-absent", response_model=AttendanceOut)
def mark_absent(
    body: MarkAbsentIn,
    db: Session = Depends(get_db),
    context: Optional[StudentContext] = Depends(get_student_context),
):
    context = _require_context(context)

    if not crud_sessions.get_session(db, body.class_id):
        raise HTTPException(status_code=404, detail="Class not found")

    try:
        return crud_attendance.record_attendance(db, body.class_id, context.student_id, AttendanceStatus.ABSENT)
    except SQLAlchemyError as e:
        logger.error(f"[Attendance] Failed to mark absent class_id={body.class_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to mark absent. Please try again.")
