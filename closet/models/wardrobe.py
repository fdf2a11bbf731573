"""
Clothing item model.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from datetime import datetime

from .base import Base


class ClothingItem(Base):
    """Clothing item model"""
    __tablename__ = "clothing_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(100), nullable=False, index=True)
    color = Column(String(7), nullable=False)  # #RRGGBB
    image_url = Column(Text, nullable=True)  # Cloudinary URL
    cloudinary_id = Column(String(255), nullable=True)  # For deletion
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        """Convert to dictionary"""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "color": self.color,
            "image_url": self.image_url,
            "created_at": self.created_at,
        }

    def to_summary(self):
        """Compact form embedded in outfits"""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "color": self.color,
            "image_url": self.image_url,
        }
