from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from portal.db.base import Base


class Student(Base):
    __tablename__ = "student_list"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    # hashed, or plain text on rows that have not logged in since the migration
    password = Column(String, nullable=True)

    # raw enrollment fields: a single title, "A, B", or a JSON array
    course = Column(Text, nullable=True)
    level = Column(Text, nullable=True)

    attendance_records = relationship("Attendance", back_populates="student")


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    password = Column(String, nullable=True)
