"""
Outfit model.
"""
from sqlalchemy import Column, Integer, String, Text, JSON, Boolean, DateTime, ForeignKey
from datetime import datetime

from .base import Base


class Outfit(Base):
    """Outfit model"""
    __tablename__ = "outfits"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    items = Column(JSON, nullable=False, default=list)  # Ordered list of clothing item ids
    favorite = Column(Boolean, default=False, nullable=False)
    # Derived once at creation; NULL on rows created before the column existed
    color = Column(String(7), nullable=True)
    image_url = Column(Text, nullable=True)
    cloudinary_id = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    @property
    def item_ids(self):
        return [item_id for item_id in (self.items or []) if item_id is not None]
