from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dojo.api.deps import get_current_user, get_db, require_roles
from dojo.db.models.role import STAFF_ROLES
from dojo.db.models.user import User
from dojo.schemas.attendance import Attendance, CheckInCreate
from dojo.schemas.gym_class import GymClass, ScheduleCheck
from dojo.schemas.roster import Roster
from dojo.services import roster as roster_service
from dojo.services import schedule as schedule_service

router = APIRouter(prefix="/classes", tags=["classes"])


@router.get("", response_model=list[GymClass])
def get_classes(
    location: int | None = Query(None, description="Filter classes by location ID"),
    include_inactive: bool = Query(False, description="Include inactive classes"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    classes = schedule_service.list_classes(
        db, location_id=location, active_only=not include_inactive
    )
    return [GymClass.model_validate(c) for c in classes]


@router.get("/{class_id}", response_model=GymClass)
def get_class_by_id(
    class_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return GymClass.model_validate(schedule_service.get_class(db, class_id))


@router.get("/{class_id}/schedule", response_model=ScheduleCheck)
def check_schedule(
    class_id: int,
    class_date: date = Query(..., description="Session date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Tell whether the class runs on the given date."""
    return ScheduleCheck(
        class_id=class_id,
        class_date=class_date,
        weekday=schedule_service.weekday_of(class_date),
        is_scheduled=schedule_service.is_class_scheduled_on(db, class_id, class_date),
    )


@router.get("/{class_id}/roster", response_model=Roster)
def get_class_roster(
    class_id: int,
    class_date: date = Query(..., description="Session date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Get the roster for a class session: eligible members with their check-in status.
    Checked-in members are listed first, then alphabetically.
    """
    roster = roster_service.get_roster(db, class_id, class_date)
    return Roster.model_validate(roster)


@router.post(
    "/{class_id}/attendance",
    response_model=Attendance,
    status_code=status.HTTP_201_CREATED,
)
def check_in_member(
    class_id: int,
    check_in_data: CheckInCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Check a member in to a class session on behalf of staff.

    Returns 409 with code ALREADY_CHECKED_IN if the member is already checked in,
    and 400 with code NOT_SCHEDULED for a date the class does not run on unless
    force_backfill is set.
    """
    record = roster_service.check_in(
        db,
        class_id=class_id,
        class_date=check_in_data.class_date,
        user_id=check_in_data.user_id,
        checked_in_by=current_user.id,
        force_backfill=check_in_data.force_backfill,
    )
    return Attendance.model_validate(record)
