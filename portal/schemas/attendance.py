from pydantic import BaseModel
from typing import Optional


class AttendanceRecordIn(BaseModel):
    class_id: int
    student_id: Optional[int] = None
    status: Optional[str] = None  # "P" when omitted


class MarkAbsentIn(BaseModel):
    class_id: int
