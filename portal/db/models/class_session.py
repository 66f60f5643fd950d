# portal/db/models/class_session.py
from sqlalchemy import Column, Integer, String, Date

from portal.db.base import Base


class ClassSession(Base):
    __tablename__ = "classlist"

    id = Column(Integer, primary_key=True, index=True)
    class_name = Column(String, nullable=False, index=True)  # course title, e.g. "Math"
    level = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String, nullable=False, default="")  # "18:30"
    meet_link = Column(String, nullable=True)
    coach = Column(String, nullable=False, default="")
