from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from dojo.api.deps import get_current_user, get_db, require_roles, require_self_or_roles
from dojo.db.models.role import STAFF_ROLES
from dojo.db.models.user import User
from dojo.schemas.attendance import Attendance, SelfCheckInCreate, SelfCheckInResult
from dojo.services import roster as roster_service

router = APIRouter(tags=["attendance"])


@router.delete("/attendance/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT)
def check_out(
    attendance_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """Remove a check-in. Removing a record that is already gone succeeds."""
    roster_service.check_out(db, attendance_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/attendance/self", response_model=SelfCheckInResult)
def self_check_in(
    check_in_data: SelfCheckInCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Check the current user in to today's session of a class."""
    record, already_checked_in = roster_service.self_check_in(
        db, current_user, check_in_data.class_id
    )
    return SelfCheckInResult(
        already_checked_in=already_checked_in,
        message="Already checked in today" if already_checked_in else "Checked in successfully!",
        attendance=Attendance.model_validate(record),
    )


@router.get("/members/{user_id}/attendance", response_model=list[Attendance])
def get_member_attendance(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get a member's attendance history, newest first.
    - Staff: any member
    - Member: only themselves
    """
    require_self_or_roles(user_id, current_user, *STAFF_ROLES)
    records = roster_service.list_attendance_for_user(db, user_id)
    return [Attendance.model_validate(r) for r in records]
