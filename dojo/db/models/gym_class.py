from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from dojo.db.base import Base


class GymClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    # 0 = Sunday ... 6 = Saturday
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    membership_type_id = Column(Integer, ForeignKey("membership_types.id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    location = relationship("Location", backref="classes")
    membership_type = relationship("MembershipType")


class ClassAccess(Base):
    __tablename__ = "class_access"
    __table_args__ = (
        UniqueConstraint("grader_user_id", "class_id", name="uq_class_access_grader_class"),
    )

    id = Column(Integer, primary_key=True, index=True)
    grader_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)

    # Relationships
    gym_class = relationship("GymClass")
