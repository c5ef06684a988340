from sqlalchemy import Column, Integer, String

from dojo.db.base import Base

ADMIN = "admin"
PROFESSOR = "professor"
INSTRUCTOR = "instructor"
MEMBER = "member"

STAFF_ROLES = (ADMIN, PROFESSOR, INSTRUCTOR)


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
