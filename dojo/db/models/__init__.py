from dojo.db.models.role import Role
from dojo.db.models.user import User
from dojo.db.models.location import Location, MembershipType
from dojo.db.models.profile import Profile
from dojo.db.models.membership import Membership
from dojo.db.models.gym_class import ClassAccess, GymClass
from dojo.db.models.attendance import Attendance
from dojo.db.models.promotion import Promotion

__all__ = [
    "Role",
    "User",
    "Location",
    "MembershipType",
    "Profile",
    "Membership",
    "GymClass",
    "ClassAccess",
    "Attendance",
    "Promotion",
]
