from __future__ import annotations

from dataclasses import dataclass

from dojo.db.models.membership import ACTIVE


@dataclass(frozen=True, slots=True)
class RosterEligibilityPolicy:
    """Defines which memberships put a member on a class roster.

    Semantics (intentionally centralized):
    - membership status is "active"
    - AND membership location == class location
    - AND (class membership type is None OR membership type == class membership type)

    A class without a membership type restriction is open to every active
    member at its location.
    """

    location_id: int
    membership_type_id: int | None = None

    def is_eligible(self, *, location_id: int, membership_type_id: int, status: str) -> bool:
        if status != ACTIVE or location_id != self.location_id:
            return False
        return self.membership_type_id is None or membership_type_id == self.membership_type_id

    def sqlalchemy_predicate(self, *, location_col, type_col, status_col):
        """Build a SQLAlchemy predicate implementing the eligibility rule."""
        from sqlalchemy import and_

        clauses = [status_col == ACTIVE, location_col == self.location_id]
        if self.membership_type_id is not None:
            clauses.append(type_col == self.membership_type_id)
        return and_(*clauses)
