from pydantic import BaseModel
from datetime import date, datetime
from typing import List, Optional

from portal.core.progress import ClassStatus
from portal.schemas.course import ClassOut


class OverallStatsOut(BaseModel):
    total: int
    present: int
    absent: int
    percent: float


class CourseStatsOut(OverallStatsOut):
    title: str
    level: str
    classes: List[ClassOut] = []


class ProgressOut(BaseModel):
    summary: OverallStatsOut
    courses: List[CourseStatsOut]


class AttendanceOut(BaseModel):
    id: int
    class_list_id: int
    student_id: int
    status: str
    attendance_date: Optional[date] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TimelineEntryOut(BaseModel):
    session: ClassOut
    record: Optional[AttendanceOut] = None
    status: ClassStatus
