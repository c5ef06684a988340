from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from dojo.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=True)
    is_child = Column(Boolean, nullable=False, default=False)
    is_kids_program = Column(Boolean, nullable=False, default=False)
    belt_rank = Column(String(32), nullable=False, default="white")
    stripes = Column(Integer, nullable=False, default=0)
    # Pointer into the promotion ledger; not a foreign key to avoid a cycle
    last_promotion_id = Column(Integer, nullable=True)
    updated_at = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="profile")
