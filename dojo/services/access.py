"""Grading capability checks.

An admin may grade in any class. A professor may grade only in classes they
hold an explicit class-access grant for. Nobody else grades.
"""

from sqlalchemy.orm import Session

import dojo.repositories.gym_class as class_repo
from dojo.db.models.role import ADMIN, PROFESSOR
from dojo.db.models.user import User
from dojo.errors import UnauthorizedError


def has_grading_access(db: Session, grader: User, class_id: int) -> bool:
    role_name = grader.role.name
    if role_name == ADMIN:
        return True
    if role_name == PROFESSOR:
        return class_repo.has_class_access(db, grader.id, class_id)
    return False


def require_grading_access(db: Session, grader: User, class_id: int) -> None:
    """
    Raises:
        UnauthorizedError: If the grader holds no grading capability for the class.
    """
    if not has_grading_access(db, grader, class_id):
        raise UnauthorizedError(f"Not authorized to grade class {class_id}")
