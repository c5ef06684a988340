from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from dojo.db.base import Base

ACTIVE = "active"
MEMBERSHIP_STATUSES = (ACTIVE, "inactive", "pending", "cancelled", "waitlist")


class Membership(Base):
    __tablename__ = "memberships"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    membership_type_id = Column(Integer, ForeignKey("membership_types.id"), nullable=False)
    status = Column(String(32), nullable=False, default=ACTIVE)

    # Relationships
    user = relationship("User", backref="memberships")
    location = relationship("Location")
    membership_type = relationship("MembershipType")
