from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dojo.api.deps import get_db, require_roles
from dojo.db.models.role import ADMIN, PROFESSOR
from dojo.db.models.user import User
from dojo.schemas.gym_class import GymClass
from dojo.schemas.profile import GradingCandidate
from dojo.services import promotion as promotion_service

router = APIRouter(prefix="/grading", tags=["grading"])


@router.get("/classes", response_model=list[GymClass])
def get_gradable_classes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN, PROFESSOR)),
):
    """Classes the current user may grade in."""
    classes = promotion_service.list_gradable_classes(db, current_user)
    return [GymClass.model_validate(c) for c in classes]


@router.get("/classes/{class_id}/candidates", response_model=list[GradingCandidate])
def get_grading_candidates(
    class_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN, PROFESSOR)),
):
    """Members eligible for the class, with their current rank and last promotion date."""
    candidates = promotion_service.list_grading_candidates(db, current_user, class_id)
    return [GradingCandidate.model_validate(c) for c in candidates]
