from pydantic import BaseModel
from datetime import date
from typing import List, Optional


class EnrollmentOut(BaseModel):
    title: str
    level: str

    class Config:
        from_attributes = True


class ClassOut(BaseModel):
    id: int
    class_name: str
    level: str
    date: date
    time: str = ""
    meet_link: Optional[str] = None
    coach: str = ""

    class Config:
        from_attributes = True


class CourseClassesOut(BaseModel):
    title: str
    level: str
    classes: List[ClassOut]


class JoinRequest(BaseModel):
    class_id: int


class JoinOut(BaseModel):
    class_id: int
    meet_link: str
