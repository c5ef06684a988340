from sqlalchemy.orm import Session

from dojo.db.models.gym_class import ClassAccess as ClassAccessModel
from dojo.db.models.gym_class import GymClass as GymClassModel


def get_class_by_id(db: Session, class_id: int) -> GymClassModel | None:
    """Get a class definition by ID."""
    return db.query(GymClassModel).filter(GymClassModel.id == class_id).first()


def get_classes(
    db: Session,
    location_id: int | None = None,
    active_only: bool = True,
) -> list[GymClassModel]:
    """Get class definitions ordered by weekday and start time."""
    query = db.query(GymClassModel)

    if location_id is not None:
        query = query.filter(GymClassModel.location_id == location_id)

    if active_only:
        query = query.filter(GymClassModel.is_active == True)  # noqa: E712

    return query.order_by(GymClassModel.day_of_week, GymClassModel.start_time).all()


def get_classes_granted_to(db: Session, grader_user_id: int) -> list[GymClassModel]:
    """Get active classes a grader holds an explicit access grant for."""
    return (
        db.query(GymClassModel)
        .join(ClassAccessModel, ClassAccessModel.class_id == GymClassModel.id)
        .filter(
            ClassAccessModel.grader_user_id == grader_user_id,
            GymClassModel.is_active == True,  # noqa: E712
        )
        .order_by(GymClassModel.name)
        .all()
    )


def has_class_access(db: Session, grader_user_id: int, class_id: int) -> bool:
    """Check whether an explicit class-access grant exists."""
    return (
        db.query(ClassAccessModel.id)
        .filter(
            ClassAccessModel.grader_user_id == grader_user_id,
            ClassAccessModel.class_id == class_id,
        )
        .first()
        is not None
    )
