from datetime import date

from sqlalchemy.orm import Session

import dojo.repositories.gym_class as class_repo
from dojo.db.models.gym_class import GymClass as GymClassModel
from dojo.domain.schedule import is_scheduled_on, weekday_of
from dojo.errors import ClassNotFoundError

__all__ = [
    "get_class",
    "list_classes",
    "is_class_scheduled_on",
    "is_scheduled_on",
    "weekday_of",
]


def get_class(db: Session, class_id: int) -> GymClassModel:
    """
    Resolve a class definition.

    Raises:
        ClassNotFoundError: If no class exists with that ID.
    """
    gym_class = class_repo.get_class_by_id(db, class_id)
    if not gym_class:
        raise ClassNotFoundError(f"Class with id {class_id} not found")
    return gym_class


def list_classes(
    db: Session,
    location_id: int | None = None,
    active_only: bool = True,
) -> list[GymClassModel]:
    return class_repo.get_classes(db, location_id=location_id, active_only=active_only)


def is_class_scheduled_on(db: Session, class_id: int, class_date: date) -> bool:
    """
    Check whether a class runs on the given date.

    Raises:
        ClassNotFoundError: If no class exists with that ID.
    """
    return is_scheduled_on(get_class(db, class_id), class_date)
