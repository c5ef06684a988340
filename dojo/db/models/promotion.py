from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text

from dojo.db.base import Base


class Promotion(Base):
    __tablename__ = "promotions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False)
    previous_belt = Column(String(32), nullable=False)
    previous_stripes = Column(Integer, nullable=False)
    new_belt = Column(String(32), nullable=False)
    new_stripes = Column(Integer, nullable=False)
    comments = Column(Text, nullable=True)
    promotion_date = Column(Date, nullable=False)
    occurred_at = Column(DateTime, nullable=False)
    graded_by = Column(Integer, ForeignKey("users.id"), nullable=False)
