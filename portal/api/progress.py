from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from portal.api.deps import get_liveness, get_store, get_student_context
from portal.core.progress_loader import (
    RequestLiveness,
    SqlProgressStore,
    StudentContext,
    load_course_timeline,
    load_history,
    load_progress,
)
from portal.schemas.progress import AttendanceOut, ProgressOut, TimelineEntryOut

router = APIRouter()

# 499 is what nginx logs for a client that went away before the answer
CLIENT_CLOSED = 499


def _discarded():
    raise HTTPException(status_code=CLIENT_CLOSED, detail="Request was cancelled")


@router.get("/", response_model=ProgressOut)
async def get_progress(
    context: Optional[StudentContext] = Depends(get_student_context),
    store: SqlProgressStore = Depends(get_store),
    liveness: RequestLiveness = Depends(get_liveness),
):
    report = await load_progress(store, context, liveness)
    if report is None:
        _discarded()
    return report


@router.get("/course", response_model=List[TimelineEntryOut])
async def get_course_timeline(
    title: str,
    level: str,
    context: Optional[StudentContext] = Depends(get_student_context),
    store: SqlProgressStore = Depends(get_store),
    liveness: RequestLiveness = Depends(get_liveness),
):
    if context is None:
        return []
    timeline = await load_course_timeline(store, context, title, level, liveness=liveness)
    if timeline is None:
        _discarded()
    return timeline


@router.get("/history", response_model=List[AttendanceOut])
async def get_history(
    limit: Optional[int] = Query(None, ge=1, le=100),
    context: Optional[StudentContext] = Depends(get_student_context),
    store: SqlProgressStore = Depends(get_store),
    liveness: RequestLiveness = Depends(get_liveness),
):
    if context is None:
        return []
    history = await load_history(store, context, limit, liveness)
    if history is None:
        _discarded()
    return history
