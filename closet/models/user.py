"""
User model.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime
from datetime import datetime

from .base import Base


class User(Base):
    """Registered user and their public profile"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    username = Column(String(50), unique=True, nullable=True, index=True)
    full_name = Column(String(255), nullable=True)
    profile_picture = Column(Text, nullable=True)  # Cloudinary URL
    profile_picture_id = Column(String(255), nullable=True)  # For deletion
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
