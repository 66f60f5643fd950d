from datetime import date
from typing import List, Optional

from sqlalchemy import distinct
from sqlalchemy.orm import Session

from portal.core.progress import SessionRow, session_sort_key
from portal.db.models.class_session import ClassSession


def to_row(cls: ClassSession) -> SessionRow:
    return SessionRow(
        id=cls.id,
        class_name=cls.class_name,
        level=cls.level,
        date=cls.date,
        time=cls.time or "",
        meet_link=cls.meet_link,
        coach=cls.coach or "",
    )


def get_session(db: Session, class_id: int) -> Optional[ClassSession]:
    return db.query(ClassSession).filter(ClassSession.id == class_id).first()


def get_sessions_for_course(db: Session, title: str, level: str) -> List[SessionRow]:
    rows = (
        db.query(ClassSession)
        .filter(
            ClassSession.class_name.ilike(f"%{title.strip()}%"),
            ClassSession.level == level,
        )
        .order_by(ClassSession.date.asc())
        .all()
    )
    return sorted((to_row(r) for r in rows), key=session_sort_key)


def get_sessions_between(
    db: Session,
    start: date,
    end: date,
    level: Optional[str] = None,
    class_name: Optional[str] = None,
) -> List[SessionRow]:
    query = db.query(ClassSession).filter(ClassSession.date >= start, ClassSession.date <= end)
    if level:
        query = query.filter(ClassSession.level == level)
    if class_name:
        query = query.filter(ClassSession.class_name == class_name)
    # time is free text ("9:00", "18:30"), so clock order is applied here
    rows = query.order_by(ClassSession.date.asc()).all()
    return sorted((to_row(r) for r in rows), key=session_sort_key)


def get_class_names(db: Session) -> List[str]:
    rows = (
        db.query(distinct(ClassSession.class_name))
        .filter(ClassSession.class_name.isnot(None))
        .order_by(ClassSession.class_name.asc())
        .all()
    )
    return [name for (name,) in rows if name]
