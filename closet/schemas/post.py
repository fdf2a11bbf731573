"""
Feed post schemas.
"""
from datetime import date as date_type, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .outfit import OutfitResponse


class PostCreate(BaseModel):
    """Schema for sharing an outfit to the feed"""
    caption: str = Field(..., max_length=2200)
    image: str = Field(..., min_length=1, description="Base64 data URL or image URL")
    outfit_id: int
    date: date_type = Field(default_factory=date_type.today, description="Day the outfit was worn")

    @field_validator('caption')
    @classmethod
    def caption_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Please add a caption to your post')
        return v.strip()


class PostResponse(BaseModel):
    id: int
    user_id: int
    username: str
    user_profile_picture: Optional[str] = None
    caption: str
    image_url: str
    outfit_id: Optional[int] = None
    date: date_type
    created_at: datetime
    outfit: Optional[OutfitResponse] = None
