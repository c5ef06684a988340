"""Roster service: who belongs on a class session, and who has checked in.

Check-ins rely on the attendance table's unique constraint on
(class_id, user_id, class_date). No read-before-insert is used to prevent
duplicates; the losing insert of a race is reported as AlreadyCheckedInError.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import dojo.repositories.attendance as attendance_repo
import dojo.repositories.membership as membership_repo
import dojo.repositories.profile as profile_repo
import dojo.repositories.user as user_repo
from dojo.core.config import settings
from dojo.db.models.attendance import Attendance as AttendanceModel
from dojo.db.models.gym_class import GymClass as GymClassModel
from dojo.db.models.profile import Profile as ProfileModel
from dojo.db.models.user import User
from dojo.domain.eligibility import RosterEligibilityPolicy
from dojo.domain.schedule import DAYS_OF_WEEK, is_scheduled_on
from dojo.errors import (
    AlreadyCheckedInError,
    NotFoundError,
    NotScheduledError,
    PersistenceFailureError,
)
from dojo.services.schedule import get_class

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RosterEntry:
    member: ProfileModel
    eligible: bool
    checked_in: bool
    check_in_time: datetime | None = None
    attendance_id: int | None = None


@dataclass(frozen=True, slots=True)
class Roster:
    gym_class: GymClassModel
    class_date: date
    is_scheduled: bool
    entries: list[RosterEntry] = field(default_factory=list)

    @property
    def checked_in_count(self) -> int:
        return sum(1 for entry in self.entries if entry.checked_in)


def _roster_sort_key(entry: RosterEntry) -> tuple[bool, str, str, int]:
    # Checked-in members first, then alphabetical
    return (
        not entry.checked_in,
        entry.member.first_name.casefold(),
        entry.member.last_name.casefold(),
        entry.member.user_id,
    )


def get_roster(db: Session, class_id: int, class_date: date) -> Roster:
    """
    Build the roster for a class session.

    - Resolves the class (ClassNotFoundError if absent)
    - Selects members with an active membership at the class location,
      restricted to the class membership type when one is configured
    - Merges in the attendance records for the date; members checked in
      without qualifying (a lapsed membership, or a staff override) are
      listed with ``eligible=False`` so the record can still be removed
    - Orders checked-in members first, then by first and last name

    The roster is returned even when the class does not run on that date, so
    existing check-ins remain visible and removable; ``is_scheduled`` tells
    the caller whether new check-ins should be offered.
    """
    gym_class = get_class(db, class_id)

    policy = RosterEligibilityPolicy(
        location_id=gym_class.location_id,
        membership_type_id=gym_class.membership_type_id,
    )
    profiles = membership_repo.get_eligible_profiles(db, policy)

    attendance_by_user = {
        record.user_id: record
        for record in attendance_repo.get_attendance_for_class_date(db, class_id, class_date)
    }

    eligible_ids = {profile.user_id for profile in profiles}
    ineligible_attendees = profile_repo.get_profiles_by_user_ids(
        db, [user_id for user_id in attendance_by_user if user_id not in eligible_ids]
    )

    entries = []
    for profile in [*profiles, *ineligible_attendees]:
        record = attendance_by_user.get(profile.user_id)
        entries.append(
            RosterEntry(
                member=profile,
                eligible=profile.user_id in eligible_ids,
                checked_in=record is not None,
                check_in_time=record.check_in_time if record else None,
                attendance_id=record.id if record else None,
            )
        )
    entries.sort(key=_roster_sort_key)

    return Roster(
        gym_class=gym_class,
        class_date=class_date,
        is_scheduled=is_scheduled_on(gym_class, class_date),
        entries=entries,
    )


def check_in(
    db: Session,
    class_id: int,
    class_date: date,
    user_id: int,
    checked_in_by: int | None,
    force_backfill: bool = False,
) -> AttendanceModel:
    """
    Check a member in to a class session.

    The date may be in the past (backfill). A date on which the class does not
    run is rejected unless ``force_backfill`` is set or off-schedule check-ins
    are enabled in settings.

    Raises:
        ClassNotFoundError: If the class does not exist.
        NotFoundError: If the member has no profile.
        NotScheduledError: If the class does not run on that date and no backfill is forced.
        AlreadyCheckedInError: If an attendance record already exists for the session.
        PersistenceFailureError: If the store fails for any other reason.
    """
    gym_class = get_class(db, class_id)

    # Every attendance row must be showable on the roster
    if not profile_repo.get_profile_by_user_id(db, user_id):
        raise NotFoundError(f"Member profile for user {user_id} not found")

    if not is_scheduled_on(gym_class, class_date):
        if not (force_backfill or settings.allow_off_schedule_checkin):
            logger.info(
                "Rejected check-in of user %s: class %s runs on %s, not %s",
                user_id,
                class_id,
                DAYS_OF_WEEK[gym_class.day_of_week],
                class_date.isoformat(),
            )
            raise NotScheduledError(
                f"Class '{gym_class.name}' does not run on {class_date.isoformat()} "
                f"(scheduled on {DAYS_OF_WEEK[gym_class.day_of_week]})"
            )
        logger.info(
            "Off-schedule check-in of user %s to class %s on %s",
            user_id,
            class_id,
            class_date.isoformat(),
        )

    try:
        record = attendance_repo.create_attendance(
            db,
            class_id=class_id,
            user_id=user_id,
            class_date=class_date,
            check_in_time=datetime.now(timezone.utc),
            checked_in_by=checked_in_by,
        )
    except AlreadyCheckedInError:
        logger.info(
            "User %s already checked in to class %s on %s",
            user_id,
            class_id,
            class_date.isoformat(),
        )
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Check-in of user %s to class %s failed: %s", user_id, class_id, e)
        raise PersistenceFailureError("Failed to check in") from e

    logger.info(
        "User %s checked in to class %s on %s by %s",
        user_id,
        class_id,
        class_date.isoformat(),
        checked_in_by,
    )
    return record


def check_out(db: Session, attendance_id: int) -> None:
    """
    Remove an attendance record.

    Checking out a record that no longer exists is treated as already done.

    Raises:
        PersistenceFailureError: If the store fails.
    """
    try:
        deleted = attendance_repo.delete_attendance(db, attendance_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Check-out of attendance %s failed: %s", attendance_id, e)
        raise PersistenceFailureError("Failed to remove check-in") from e

    if deleted:
        logger.info("Attendance %s removed", attendance_id)
    else:
        logger.debug("Attendance %s already removed", attendance_id)


def self_check_in(
    db: Session, member: User, class_id: int
) -> tuple[AttendanceModel, bool]:
    """
    Check the calling member in to today's session of a class.

    A repeated check-in is a normal outcome, not an error: the existing
    record is returned with ``already_checked_in`` set.

    Returns:
        Tuple of (attendance record, already_checked_in)
    """
    today = date.today()
    try:
        record = check_in(db, class_id, today, member.id, checked_in_by=None)
    except AlreadyCheckedInError:
        existing = attendance_repo.get_attendance_by_key(db, class_id, member.id, today)
        if existing is None:
            # Removed between the failed insert and this read
            raise
        return existing, True
    return record, False


def list_attendance_for_user(db: Session, user_id: int) -> list[AttendanceModel]:
    """Raises NotFoundError if the user does not exist."""
    if not user_repo.get_user_by_id(db, user_id):
        raise NotFoundError(f"User with id {user_id} not found")
    return attendance_repo.get_attendance_for_user(db, user_id)
