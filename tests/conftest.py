from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from portal.api.deps import get_session_factory
from portal.core.security import create_access_token, get_password_hash
from portal.db import Attendance, Base, ClassSession, Student, Teacher
from portal.main import app


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'portal_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class CommitFailingSession(Session):
    def commit(self):
        raise OperationalError("COMMIT", None, Exception("database is locked"))


@pytest.fixture
def failing_session_factory(engine):
    # reads work, every write fails on commit
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=CommitFailingSession)


@pytest.fixture
def failing_client(failing_session_factory):
    app.dependency_overrides[get_session_factory] = lambda: failing_session_factory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def student(db):
    s = Student(
        email="ana@example.com",
        name="Ana Lopez",
        password=get_password_hash("s3cret"),
        course="Math, Science",
        level="A1,B2",
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture
def teacher(db):
    t = Teacher(email="coach@example.com", name="Coach Kim", password="legacy-pass")
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


def token_for(user, role: str = "student") -> str:
    return create_access_token(
        data={"sub": user.email, "id": user.id, "email": user.email, "name": user.name, "role": role}
    )


@pytest.fixture
def auth_headers(student):
    return {"Authorization": f"Bearer {token_for(student)}"}


def add_class(db, class_name: str, level: str, on: date, time: str = "10:00", meet_link=None, coach="Coach Kim"):
    cls = ClassSession(class_name=class_name, level=level, date=on, time=time, meet_link=meet_link, coach=coach)
    db.add(cls)
    db.commit()
    db.refresh(cls)
    return cls


def add_attendance(db, cls, student, status: str = "P"):
    rec = Attendance(class_list_id=cls.id, student_id=student.id, status=status, attendance_date=cls.date)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    return rec


@pytest.fixture
def math_classes(db, today):
    # four A1 math classes: three already happened, one tomorrow
    return [
        add_class(db, "Math", "A1", today - timedelta(days=3), meet_link="https://meet.example.com/m1"),
        add_class(db, "Math", "A1", today - timedelta(days=2)),
        add_class(db, "Math", "A1", today - timedelta(days=1)),
        add_class(db, "Math", "A1", today + timedelta(days=1), meet_link="https://meet.example.com/m4?x=1"),
    ]
