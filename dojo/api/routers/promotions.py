from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dojo.api.deps import get_current_user, get_db, require_roles, require_self_or_roles
from dojo.db.models.role import ADMIN, STAFF_ROLES
from dojo.db.models.user import User
from dojo.schemas.profile import MemberProfile
from dojo.schemas.promotion import Promotion, PromotionCreate, PromotionResult
from dojo.services import promotion as promotion_service

router = APIRouter(tags=["promotions"])


@router.post(
    "/promotions",
    response_model=PromotionResult,
    status_code=status.HTTP_201_CREATED,
)
def create_promotion(
    promotion_data: PromotionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Record a grading decision.

    Admins may grade in any class; professors only in classes they have been
    granted access to. The previous rank is taken from the member's profile.
    """
    result = promotion_service.promote(
        db,
        grader=current_user,
        user_id=promotion_data.user_id,
        class_id=promotion_data.class_id,
        new_belt=promotion_data.new_belt,
        new_stripes=promotion_data.new_stripes,
        comments=promotion_data.comments,
    )
    return PromotionResult.model_validate(result)


@router.get("/members/{user_id}/promotions", response_model=list[Promotion])
def get_member_promotions(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get a member's promotion history, newest first.
    - Staff: any member
    - Member: only themselves
    """
    require_self_or_roles(user_id, current_user, *STAFF_ROLES)
    promotions = promotion_service.list_promotions_for_user(db, user_id)
    return [Promotion.model_validate(p) for p in promotions]


@router.post("/members/{user_id}/rank/rebuild", response_model=MemberProfile)
def rebuild_member_rank(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    """Re-derive a member's current rank from the promotion ledger. Admin only."""
    profile = promotion_service.rebuild_rank_from_ledger(db, user_id)
    return MemberProfile.model_validate(profile)
