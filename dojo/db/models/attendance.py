from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from dojo.db.base import Base


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint(
            "class_id", "user_id", "class_date", name="uq_attendance_class_user_date"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_date = Column(Date, nullable=False)
    check_in_time = Column(DateTime, nullable=False)
    checked_in_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    gym_class = relationship("GymClass")
