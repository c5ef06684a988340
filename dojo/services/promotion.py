"""Promotion service: grading members and keeping their cached rank in sync.

The promotion ledger is the source of truth for a member's rank. The
``belt_rank``/``stripes`` columns on the profile are a cache of the newest
ledger entry, and every write to them is derived from the ledger.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import dojo.repositories.gym_class as class_repo
import dojo.repositories.membership as membership_repo
import dojo.repositories.profile as profile_repo
import dojo.repositories.promotion as promotion_repo
from dojo.core.config import settings
from dojo.db.models.gym_class import GymClass as GymClassModel
from dojo.db.models.profile import Profile as ProfileModel
from dojo.db.models.promotion import Promotion as PromotionModel
from dojo.db.models.role import ADMIN, PROFESSOR
from dojo.db.models.user import User
from dojo.domain import ranks
from dojo.domain.eligibility import RosterEligibilityPolicy
from dojo.domain.ranks import Program, Rank
from dojo.errors import (
    DemotionNotAllowedError,
    NoChangeError,
    NotFoundError,
    PersistenceFailureError,
    UnknownBeltError,
)
from dojo.services.access import require_grading_access
from dojo.services.schedule import get_class

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PromotionResult:
    promotion: PromotionModel
    is_advancement: bool


@dataclass(frozen=True, slots=True)
class GradingCandidate:
    profile: ProfileModel
    program: Program
    last_promotion_date: date | None


def program_of(profile: ProfileModel) -> Program:
    return Program.for_profile(bool(profile.is_kids_program))


def current_rank(profile: ProfileModel) -> Rank:
    """The profile's cached rank, falling back to the registration default."""
    program = program_of(profile)
    return Rank(
        program=program,
        belt=profile.belt_rank or ranks.DEFAULT_BELT,
        stripes=profile.stripes or ranks.DEFAULT_STRIPES,
    )


def _get_profile(db: Session, user_id: int) -> ProfileModel:
    profile = profile_repo.get_profile_by_user_id(db, user_id)
    if not profile:
        raise NotFoundError(f"Member profile for user {user_id} not found")
    return profile


def _apply_latest_rank(db: Session, user_id: int) -> ProfileModel:
    latest = promotion_repo.get_latest_promotion_by_user_id(db, user_id)
    if latest is None:
        # Never graded: the rank chosen at registration stands
        profile = _get_profile(db, user_id)
        return profile_repo.update_profile_rank(
            db,
            user_id,
            belt_rank=profile.belt_rank or ranks.DEFAULT_BELT,
            stripes=profile.stripes or ranks.DEFAULT_STRIPES,
            last_promotion_id=None,
        )
    return profile_repo.update_profile_rank(
        db,
        user_id,
        belt_rank=latest.new_belt,
        stripes=latest.new_stripes,
        last_promotion_id=latest.id,
    )


def sync_profile_rank(db: Session, user_id: int) -> ProfileModel:
    """
    Rewrite the cached rank from the newest ledger entry, retrying on store errors.

    Raises:
        PersistenceFailureError: If every attempt fails.
    """
    attempts = settings.profile_sync_attempts
    last_error: SQLAlchemyError | None = None
    for attempt in range(1, attempts + 1):
        try:
            return _apply_latest_rank(db, user_id)
        except SQLAlchemyError as e:
            db.rollback()
            last_error = e
            logger.warning(
                "Profile rank sync for user %s failed (attempt %d/%d): %s",
                user_id,
                attempt,
                attempts,
                e,
            )
    logger.error(
        "Profile rank for user %s is out of sync with the promotion ledger", user_id
    )
    raise PersistenceFailureError(
        f"Promotion recorded but the rank of user {user_id} could not be updated"
    ) from last_error


def promote(
    db: Session,
    grader: User,
    user_id: int,
    class_id: int,
    new_belt: str,
    new_stripes: int,
    comments: str | None = None,
) -> PromotionResult:
    """
    Record a grading decision for a member.

    - Validates the grader holds grading capability for the class
    - Validates the class and the member profile exist
    - Validates the new rank against the member's program
    - Rejects a rank identical to the current one
    - Rejects non-advancements when demotions are disabled
    - Appends the promotion, then syncs the profile's cached rank

    Lateral and backward rank changes are accepted by default so grading
    mistakes can be corrected with a new ledger entry.

    Raises:
        UnauthorizedError: If the grader may not grade this class.
        ClassNotFoundError: If the class does not exist.
        NotFoundError: If the member has no profile.
        InvalidRankError: If the new rank is not valid for the member's program.
        NoChangeError: If the new rank equals the current rank.
        DemotionNotAllowedError: If demotions are disabled and this is not an advancement.
        PersistenceFailureError: If the ledger append or the profile sync fails.
    """
    require_grading_access(db, grader, class_id)
    get_class(db, class_id)
    profile = _get_profile(db, user_id)

    previous = current_rank(profile)
    new = Rank.create(previous.program, new_belt, new_stripes)

    if new == previous:
        raise NoChangeError(
            f"Member is already {previous.belt} belt with {previous.stripes} stripe(s)"
        )

    try:
        advancement = ranks.is_advancement(previous, new)
    except UnknownBeltError:
        # Legacy profile value outside the taxonomy; any valid rank moves forward
        logger.warning(
            "User %s has unknown cached belt '%s'", user_id, previous.belt
        )
        advancement = True

    if not advancement and not settings.allow_demotion:
        raise DemotionNotAllowedError(
            "Demotions are disabled; the new rank must be higher than the current rank"
        )

    try:
        promotion = promotion_repo.create_promotion(
            db,
            user_id=user_id,
            class_id=class_id,
            previous_belt=previous.belt,
            previous_stripes=previous.stripes,
            new_belt=new.belt,
            new_stripes=new.stripes,
            graded_by=grader.id,
            occurred_at=datetime.now(timezone.utc),
            comments=comments,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to record promotion for user %s: %s", user_id, e)
        raise PersistenceFailureError("Failed to save promotion") from e

    logger.info(
        "User %s graded %s/%d -> %s/%d by %s in class %s (advancement=%s)",
        user_id,
        previous.belt,
        previous.stripes,
        new.belt,
        new.stripes,
        grader.id,
        class_id,
        advancement,
    )

    sync_profile_rank(db, user_id)
    return PromotionResult(promotion=promotion, is_advancement=advancement)


def rebuild_rank_from_ledger(db: Session, user_id: int) -> ProfileModel:
    """
    Re-derive a member's cached rank from the promotion ledger.

    A member with no ledger entries keeps the rank they registered with.

    Raises:
        NotFoundError: If the member has no profile.
        PersistenceFailureError: If the profile cannot be written.
    """
    _get_profile(db, user_id)
    return sync_profile_rank(db, user_id)


def list_promotions_for_user(db: Session, user_id: int) -> list[PromotionModel]:
    """Raises NotFoundError if the member has no profile."""
    _get_profile(db, user_id)
    return promotion_repo.get_promotions_by_user_id(db, user_id)


def list_gradable_classes(db: Session, grader: User) -> list[GymClassModel]:
    """Admins see every active class; professors see the classes granted to them."""
    role_name = grader.role.name
    if role_name == ADMIN:
        return sorted(class_repo.get_classes(db, active_only=True), key=lambda c: c.name)
    if role_name == PROFESSOR:
        return class_repo.get_classes_granted_to(db, grader.id)
    return []


def list_grading_candidates(
    db: Session, grader: User, class_id: int
) -> list[GradingCandidate]:
    """
    Members eligible for a class, with their rank and last promotion date.

    Raises:
        UnauthorizedError: If the grader may not grade this class.
        ClassNotFoundError: If the class does not exist.
    """
    require_grading_access(db, grader, class_id)
    gym_class = get_class(db, class_id)

    policy = RosterEligibilityPolicy(
        location_id=gym_class.location_id,
        membership_type_id=gym_class.membership_type_id,
    )
    profiles = membership_repo.get_eligible_profiles(db, policy)
    last_dates = promotion_repo.get_last_promotion_dates(
        db, [p.user_id for p in profiles]
    )

    candidates = [
        GradingCandidate(
            profile=p,
            program=program_of(p),
            last_promotion_date=last_dates.get(p.user_id),
        )
        for p in profiles
    ]
    candidates.sort(
        key=lambda c: (c.profile.first_name.casefold(), c.profile.last_name.casefold())
    )
    return candidates
