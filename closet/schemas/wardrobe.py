"""
Clothing item schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class ClothingItemBase(BaseModel):
    """Base schema for clothing items"""
    name: str = Field(..., min_length=1, max_length=255, description="Display name of the item")
    type: str = Field(..., min_length=1, max_length=100, description="Type of clothing item (e.g., shirt, pants, dress)")
    color: str = Field(..., pattern=HEX_COLOR_PATTERN, description="Item color as #RRGGBB")


class ClothingItemCreate(ClothingItemBase):
    """Schema for creating a new clothing item"""
    image: Optional[str] = Field(None, description="Base64 data URL or image URL")


class ClothingItemUpdate(BaseModel):
    """Schema for updating a clothing item; omitted fields are left unchanged"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    image: Optional[str] = Field(None, description="Base64 data URL or image URL")


class ClothingItem(ClothingItemBase):
    """Clothing item with ID"""
    id: int = Field(..., description="Unique identifier for the item")
    image_url: Optional[str] = Field(None, description="URL to item image")
    created_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Linen shirt",
                "type": "shirt",
                "color": "#1E3A8A",
                "image_url": "https://res.cloudinary.com/demo/image/upload/closet/items/shirt.jpg",
                "created_at": "2024-05-01T10:00:00"
            }
        }


class ClothingItemSummary(BaseModel):
    """Compact item as embedded in outfits"""
    id: int
    name: str
    type: Optional[str] = None
    color: str
    image_url: Optional[str] = None


class ItemUsage(BaseModel):
    """How many outfits reference an item"""
    item_id: int
    outfit_count: int


class ItemDeleteResponse(BaseModel):
    status: str = "ok"
    removed_from_outfits: int
