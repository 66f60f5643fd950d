# portal/db/__init__.py
# importing portal.db registers every model on Base.metadata

from portal.db.base import Base
from portal.db.models.user import Student, Teacher
from portal.db.models.class_session import ClassSession
from portal.db.models.attendance import Attendance

__all__ = ["Base", "Student", "Teacher", "ClassSession", "Attendance"]
