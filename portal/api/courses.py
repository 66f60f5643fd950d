import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portal.api.deps import get_db, get_session_factory, get_store, get_student_context, require_student
from portal.core.attendance_service import record_attendance_quietly, with_class_id
from portal.core.exceptions import StoreError
from portal.core.progress import match_sessions
from portal.core.progress_loader import SqlProgressStore, StudentContext
from portal.crud import class_session as crud_sessions
from portal.schemas.course import CourseClassesOut, EnrollmentOut, JoinOut, JoinRequest
from portal.schemas.user import SessionUser

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[EnrollmentOut])
def list_courses(context: Optional[StudentContext] = Depends(get_student_context)):
    if context is None:
        return []
    return context.enrollments


@router.get("/classes", response_model=CourseClassesOut)
async def list_course_classes(
    title: str,
    level: str,
    upcoming: bool = Query(True, description="only classes dated today or later"),
    current_user: SessionUser = Depends(require_student),
    store: SqlProgressStore = Depends(get_store),
):
    try:
        classes = match_sessions(title, level, await store.fetch_sessions(title, level))
    except StoreError as e:
        logger.error(f"[Courses] Error fetching classes for {title} ({level}): {e}")
        raise HTTPException(status_code=502, detail="Failed to load classes")

    if upcoming:
        today = date.today()
        classes = [c for c in classes if c.date >= today]

    return {"title": title, "level": level, "classes": classes}


@router.post("/join", response_model=JoinOut)
def join_class(
    body: JoinRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory=Depends(get_session_factory),
    context: Optional[StudentContext] = Depends(get_student_context),
):
    cls = crud_sessions.get_session(db, body.class_id)
    if not cls:
        raise HTTPException(status_code=404, detail="Class not found")
    if not cls.meet_link:
        raise HTTPException(status_code=404, detail="No meeting link available for this session.")

    if context is not None:
        # the link goes back right away; recording finishes after the response
        background_tasks.add_task(record_attendance_quietly, session_factory, cls.id, context.student_id)
    else:
        logger.warning(f"[Courses] Join without a student row, attendance not recorded for class_id={cls.id}")

    return {"class_id": cls.id, "meet_link": with_class_id(cls.meet_link, cls.id)}
