from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from dojo.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)

    # Relationships
    role = relationship("Role", backref="users")
    profile = relationship("Profile", back_populates="user", uselist=False)
