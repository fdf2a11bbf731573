"""
Calendar schemas.
"""
from datetime import date as date_type
from typing import Optional
from pydantic import BaseModel, Field


class CalendarEntryUpdate(BaseModel):
    """Outfit to schedule on a day"""
    outfit_id: int


class CalendarEvent(BaseModel):
    """Calendar entry joined with its outfit for display"""
    id: int
    date: date_type
    outfit_id: Optional[int] = None
    title: str = Field(..., description="Outfit name, or 'Unknown Outfit' when it no longer exists")
    color: str
    favorite: bool = False
