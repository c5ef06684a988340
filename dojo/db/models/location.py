from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from dojo.db.base import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)


class MembershipType(Base):
    __tablename__ = "membership_types"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    location = relationship("Location", backref="membership_types")
