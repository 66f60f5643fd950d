import calendar
import logging
from collections import Counter
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.api.deps import get_db, get_student_context
from portal.core.progress_loader import StudentContext
from portal.crud import class_session as crud_sessions
from portal.schemas.schedule import DayScheduleOut, MonthScheduleOut

router = APIRouter()
logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int):
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _level_for(level: Optional[str], context: Optional[StudentContext]) -> Optional[str]:
    if level:
        return level
    return context.level if context else None


@router.get("/month", response_model=MonthScheduleOut)
def get_month_schedule(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    level: Optional[str] = None,
    class_name: Optional[str] = None,
    db: Session = Depends(get_db),
    context: Optional[StudentContext] = Depends(get_student_context),
):
    today = date.today()
    year = year or today.year
    month = month or today.month
    start, end = month_bounds(year, month)
    level = _level_for(level, context)

    try:
        sessions = crud_sessions.get_sessions_between(db, start, end, level=level, class_name=class_name)
    except SQLAlchemyError as e:
        logger.error(f"[Schedule] Failed to fetch sessions for {year}-{month:02d}: {e}")
        sessions = []

    counts = Counter(s.date.isoformat() for s in sessions)
    return {
        "year": year,
        "month": month,
        "start": start,
        "end": end,
        "level": level,
        "class_name": class_name,
        "sessions": sessions,
        "counts": dict(counts),
    }


@router.get("/day", response_model=DayScheduleOut)
def get_day_schedule(
    on: Optional[date] = None,
    level: Optional[str] = None,
    class_name: Optional[str] = None,
    db: Session = Depends(get_db),
    context: Optional[StudentContext] = Depends(get_student_context),
):
    on = on or date.today()
    level = _level_for(level, context)

    try:
        sessions = crud_sessions.get_sessions_between(db, on, on, level=level, class_name=class_name)
    except SQLAlchemyError as e:
        logger.error(f"[Schedule] Failed to fetch sessions for {on}: {e}")
        sessions = []

    return {"date": on, "level": level, "sessions": sessions}


@router.get("/class-options", response_model=List[str])
def get_class_options(
    db: Session = Depends(get_db),
    context: Optional[StudentContext] = Depends(get_student_context),
):
    try:
        return crud_sessions.get_class_names(db)
    except SQLAlchemyError as e:
        logger.warning(f"[Schedule] Failed to fetch class options: {e}")
        return []
