from pydantic import BaseModel
from datetime import date
from typing import Dict, List, Optional

from portal.schemas.course import ClassOut


class MonthScheduleOut(BaseModel):
    year: int
    month: int
    start: date
    end: date
    level: Optional[str] = None
    class_name: Optional[str] = None
    sessions: List[ClassOut]
    counts: Dict[str, int]  # ISO date -> number of sessions


class DayScheduleOut(BaseModel):
    date: date
    level: Optional[str] = None
    sessions: List[ClassOut]
