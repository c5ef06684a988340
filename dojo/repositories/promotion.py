from datetime import date, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from dojo.db.models.promotion import Promotion as PromotionModel


def create_promotion(
    db: Session,
    user_id: int,
    class_id: int,
    previous_belt: str,
    previous_stripes: int,
    new_belt: str,
    new_stripes: int,
    graded_by: int,
    occurred_at: datetime,
    comments: str | None = None,
) -> PromotionModel:
    """Append a promotion to the ledger. Pure data access - no business logic."""
    db_promotion = PromotionModel(
        user_id=user_id,
        class_id=class_id,
        previous_belt=previous_belt,
        previous_stripes=previous_stripes,
        new_belt=new_belt,
        new_stripes=new_stripes,
        comments=comments,
        promotion_date=occurred_at.date(),
        occurred_at=occurred_at,
        graded_by=graded_by,
    )
    db.add(db_promotion)
    db.commit()
    db.refresh(db_promotion)
    return db_promotion


def get_promotions_by_user_id(db: Session, user_id: int) -> list[PromotionModel]:
    """Get a member's promotion history, newest first."""
    return (
        db.query(PromotionModel)
        .filter(PromotionModel.user_id == user_id)
        .order_by(PromotionModel.occurred_at.desc(), PromotionModel.id.desc())
        .all()
    )


def get_latest_promotion_by_user_id(db: Session, user_id: int) -> PromotionModel | None:
    """Get the newest ledger entry for a member."""
    return (
        db.query(PromotionModel)
        .filter(PromotionModel.user_id == user_id)
        .order_by(PromotionModel.occurred_at.desc(), PromotionModel.id.desc())
        .first()
    )


def get_last_promotion_dates(db: Session, user_ids: list[int]) -> dict[int, date]:
    """Map each user ID to the date of their most recent promotion."""
    if not user_ids:
        return {}
    rows = (
        db.query(PromotionModel.user_id, func.max(PromotionModel.promotion_date))
        .filter(PromotionModel.user_id.in_(user_ids))
        .group_by(PromotionModel.user_id)
        .all()
    )
    return {user_id: last_date for user_id, last_date in rows}
