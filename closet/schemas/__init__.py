"""
Pydantic schemas for the Closet API.

Import all schemas here for easy access.
"""
from .common import HealthResponse, CursorPage
from .user import UserBase, UserCreate, UserUpdate, UserResponse, ProfilePictureUpdate, Token
from .wardrobe import (
    ClothingItemBase,
    ClothingItem,
    ClothingItemCreate,
    ClothingItemUpdate,
    ClothingItemSummary,
    ItemUsage,
    ItemDeleteResponse,
)
from .outfit import OutfitCreate, OutfitUpdate, OutfitResponse, ColorPreviewRequest, ColorPreviewResponse
from .calendar import CalendarEntryUpdate, CalendarEvent
from .post import PostCreate, PostResponse

__all__ = [
    # Common
    "HealthResponse",
    "CursorPage",
    # User
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "ProfilePictureUpdate",
    "Token",
    # Wardrobe
    "ClothingItemBase",
    "ClothingItem",
    "ClothingItemCreate",
    "ClothingItemUpdate",
    "ClothingItemSummary",
    "ItemUsage",
    "ItemDeleteResponse",
    # Outfit
    "OutfitCreate",
    "OutfitUpdate",
    "OutfitResponse",
    "ColorPreviewRequest",
    "ColorPreviewResponse",
    # Calendar
    "CalendarEntryUpdate",
    "CalendarEvent",
    # Post
    "PostCreate",
    "PostResponse",
]
