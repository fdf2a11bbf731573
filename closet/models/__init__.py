"""
Database models for Closet.

Import all models here for easy access and to ensure they are registered with SQLAlchemy.
"""
from .base import Base
from .user import User
from .wardrobe import ClothingItem
from .outfit import Outfit
from .calendar import CalendarEntry
from .post import Post

__all__ = ["Base", "User", "ClothingItem", "Outfit", "CalendarEntry", "Post"]
