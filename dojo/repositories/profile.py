from datetime import datetime, timezone

from sqlalchemy.orm import Session

from dojo.db.models.profile import Profile as ProfileModel
from dojo.errors import NotFoundError


def get_profile_by_user_id(db: Session, user_id: int) -> ProfileModel | None:
    """Get a member profile by user ID."""
    return db.query(ProfileModel).filter(ProfileModel.user_id == user_id).first()


def update_profile_rank(
    db: Session,
    user_id: int,
    belt_rank: str,
    stripes: int,
    last_promotion_id: int | None,
) -> ProfileModel:
    """Write the cached rank and last promotion pointer. Pure data access - no business logic."""
    profile = get_profile_by_user_id(db, user_id)
    if not profile:
        raise NotFoundError(f"Profile for user {user_id} not found")

    profile.belt_rank = belt_rank
    profile.stripes = stripes
    profile.last_promotion_id = last_promotion_id
    profile.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(profile)
    return profile


def get_profiles_by_user_ids(db: Session, user_ids: list[int]) -> list[ProfileModel]:
    """Get the member profiles for a set of user IDs."""
    if not user_ids:
        return []
    return db.query(ProfileModel).filter(ProfileModel.user_id.in_(user_ids)).all()
