"""
Feed post model.
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from datetime import datetime

from .base import Base


class Post(Base):
    """An outfit shared to the feed"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Profile snapshot taken when the post is created
    username = Column(String(50), nullable=False, default="Anonymous")
    user_profile_picture = Column(Text, nullable=True)
    caption = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    cloudinary_id = Column(String(255), nullable=True)
    outfit_id = Column(Integer, ForeignKey("outfits.id"), nullable=True, index=True)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
