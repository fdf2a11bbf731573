"""
Outfit schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from .wardrobe import ClothingItemSummary, HEX_COLOR_PATTERN


def _unique_ids(ids: List[int]) -> List[int]:
    # Keep first occurrence, preserve order
    seen = set()
    return [i for i in ids if not (i in seen or seen.add(i))]


class OutfitCreate(BaseModel):
    """Schema for creating an outfit"""
    name: str = Field(..., min_length=1, max_length=255)
    item_ids: List[int] = Field(..., min_length=1, description="Clothing item ids making up the outfit")
    image: Optional[str] = Field(None, description="Optional base64 data URL or image URL")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Outfit name is required')
        return v.strip()

    @field_validator('item_ids')
    @classmethod
    def dedupe_item_ids(cls, v: List[int]) -> List[int]:
        return _unique_ids(v)


class OutfitUpdate(BaseModel):
    """Schema for editing an outfit; omitted fields are left unchanged"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    favorite: Optional[bool] = None
    item_ids: Optional[List[int]] = Field(None, min_length=1)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN, description="Explicit card color; wins over derivation")
    image: Optional[str] = None

    @field_validator('item_ids')
    @classmethod
    def dedupe_item_ids(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        return _unique_ids(v) if v is not None else v


class OutfitResponse(BaseModel):
    """Outfit with hydrated items and its display color"""
    id: int
    user_id: int
    name: str
    items: List[ClothingItemSummary]
    favorite: bool
    color: str = Field(..., description="Persisted color, or a derived display color when none is stored")
    color_is_derived: bool = Field(False, description="True when color was computed for display and not persisted")
    image_url: Optional[str] = None
    created_at: datetime


class ColorPreviewRequest(BaseModel):
    """Selection to derive an unsaved outfit color from"""
    item_ids: List[int] = Field(default_factory=list)
    override: Optional[str] = None

    @field_validator('item_ids')
    @classmethod
    def dedupe_item_ids(cls, v: List[int]) -> List[int]:
        return _unique_ids(v)


class ColorPreviewResponse(BaseModel):
    color: str
