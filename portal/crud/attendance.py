from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from portal.core.progress import AttendanceRow, AttendanceStatus
from portal.db.models.attendance import Attendance


def to_row(rec: Attendance) -> AttendanceRow:
    return AttendanceRow(
        id=rec.id,
        class_list_id=rec.class_list_id,
        student_id=rec.student_id,
        status=rec.status,
        attendance_date=rec.attendance_date,
        created_at=rec.created_at,
    )


def get_records_for_sessions(db: Session, student_id: int, class_ids: Iterable[int]) -> List[AttendanceRow]:
    ids = [i for i in class_ids if i]
    if not ids:
        return []
    rows = (
        db.query(Attendance)
        .filter(Attendance.class_list_id.in_(ids), Attendance.student_id == student_id)
        .all()
    )
    return [to_row(r) for r in rows]


def get_recent_records(db: Session, student_id: int, limit: int) -> List[AttendanceRow]:
    rows = (
        db.query(Attendance)
        .filter(Attendance.student_id == student_id)
        .order_by(Attendance.created_at.desc(), Attendance.id.desc())
        .limit(limit)
        .all()
    )
    return [to_row(r) for r in rows]


def record_attendance(
    db: Session,
    class_id: int,
    student_id: int,
    status: AttendanceStatus = AttendanceStatus.PRESENT,
    on: Optional[date] = None,
) -> Attendance:
    # one row per (class, student): later marks overwrite the status
    existing = db.query(Attendance).filter(
        Attendance.class_list_id == class_id,
        Attendance.student_id == student_id,
    ).first()

    if existing:
        existing.status = status.value
        existing.attendance_date = on or existing.attendance_date
    else:
        existing = Attendance(
            class_list_id=class_id,
            student_id=student_id,
            status=status.value,
            attendance_date=on or date.today(),
        )
        db.add(existing)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(existing)
    return existing
