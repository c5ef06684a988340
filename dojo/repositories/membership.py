from sqlalchemy import select
from sqlalchemy.orm import Session

from dojo.db.models.membership import Membership as MembershipModel
from dojo.db.models.profile import Profile as ProfileModel
from dojo.domain.eligibility import RosterEligibilityPolicy


def get_eligible_profiles(
    db: Session,
    policy: RosterEligibilityPolicy,
) -> list[ProfileModel]:
    """
    Get the profiles of members whose memberships satisfy the eligibility policy.

    Each member appears once even when several of their memberships qualify.
    Users without a profile are not returned.
    """
    eligible_user_ids = select(MembershipModel.user_id).where(
        policy.sqlalchemy_predicate(
            location_col=MembershipModel.location_id,
            type_col=MembershipModel.membership_type_id,
            status_col=MembershipModel.status,
        )
    )
    return (
        db.query(ProfileModel)
        .filter(ProfileModel.user_id.in_(eligible_user_ids))
        .all()
    )
