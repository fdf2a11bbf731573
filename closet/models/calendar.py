"""
Calendar entry model.
"""
from sqlalchemy import Column, Integer, Date, ForeignKey, UniqueConstraint

from .base import Base


class CalendarEntry(Base):
    """An outfit scheduled on a given day"""
    __tablename__ = "calendar_entries"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_calendar_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    outfit_id = Column(Integer, ForeignKey("outfits.id"), nullable=True)
