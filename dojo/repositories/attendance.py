from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dojo.db.models.attendance import Attendance as AttendanceModel
from dojo.errors import AlreadyCheckedInError

UNIQUE_CONSTRAINT_NAME = "uq_attendance_class_user_date"

# SQLSTATE for unique_violation
_PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a duplicate-key failure apart from other integrity errors."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == _PG_UNIQUE_VIOLATION
    message = str(orig)
    return "UNIQUE constraint failed" in message or UNIQUE_CONSTRAINT_NAME in message


def get_attendance_by_id(db: Session, attendance_id: int) -> AttendanceModel | None:
    """Get an attendance record by ID."""
    return db.query(AttendanceModel).filter(AttendanceModel.id == attendance_id).first()


def get_attendance_for_class_date(
    db: Session, class_id: int, class_date: date
) -> list[AttendanceModel]:
    """Get all attendance records for a class session."""
    return (
        db.query(AttendanceModel)
        .filter(
            AttendanceModel.class_id == class_id,
            AttendanceModel.class_date == class_date,
        )
        .order_by(AttendanceModel.check_in_time)
        .all()
    )


def get_attendance_for_user(db: Session, user_id: int) -> list[AttendanceModel]:
    """Get a member's attendance history, newest class date first."""
    return (
        db.query(AttendanceModel)
        .filter(AttendanceModel.user_id == user_id)
        .order_by(AttendanceModel.class_date.desc(), AttendanceModel.check_in_time.desc())
        .all()
    )


def get_attendance_by_key(
    db: Session, class_id: int, user_id: int, class_date: date
) -> AttendanceModel | None:
    """Get the attendance record for a (class, member, date) triple."""
    return (
        db.query(AttendanceModel)
        .filter(
            AttendanceModel.class_id == class_id,
            AttendanceModel.user_id == user_id,
            AttendanceModel.class_date == class_date,
        )
        .first()
    )


def create_attendance(
    db: Session,
    class_id: int,
    user_id: int,
    class_date: date,
    check_in_time: datetime,
    checked_in_by: int | None = None,
) -> AttendanceModel:
    """
    Insert an attendance record. Pure data access - no business logic.

    The unique constraint on (class_id, user_id, class_date) is the only
    de-duplication; a violation is reported as AlreadyCheckedInError.
    """
    db_attendance = AttendanceModel(
        class_id=class_id,
        user_id=user_id,
        class_date=class_date,
        check_in_time=check_in_time,
        checked_in_by=checked_in_by,
    )
    db.add(db_attendance)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            raise AlreadyCheckedInError(
                f"User {user_id} is already checked in to class {class_id} on {class_date.isoformat()}"
            ) from e
        raise
    db.refresh(db_attendance)
    return db_attendance


def delete_attendance(db: Session, attendance_id: int) -> bool:
    """Delete an attendance record. Returns False if it no longer exists."""
    deleted = (
        db.query(AttendanceModel)
        .filter(AttendanceModel.id == attendance_id)
        .delete()
    )
    db.commit()
    return deleted > 0
