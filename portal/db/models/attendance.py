# portal/db/models/attendance.py
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from portal.db.base import Base


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)
    class_list_id = Column(Integer, ForeignKey("classlist.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("student_list.id"), nullable=False, index=True)

    # "P" - present, "A" - absent
    # no row for a past class means it was never marked
    status = Column(String(1), nullable=False, default="P")

    attendance_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="attendance_records")
    class_session = relationship("ClassSession")
