from typing import Optional

from sqlalchemy.orm import Session

from portal.core.security import get_password_hash
from portal.db.models.user import Student, Teacher


def model_for_role(role: str):
    return Student if role == "student" else Teacher


def get_user_by_email(db: Session, email: str, role: str = "student"):
    model = model_for_role(role)
    return db.query(model).filter(model.email == email).first()


def get_student_by_email(db: Session, email: str) -> Optional[Student]:
    return db.query(Student).filter(Student.email == email).first()


def get_student_by_id(db: Session, student_id: int) -> Optional[Student]:
    return db.query(Student).filter(Student.id == student_id).first()


def rehash_password(db: Session, user, plain_password: str):
    user.password = get_password_hash(plain_password)
    db.commit()
    db.refresh(user)
    return user
