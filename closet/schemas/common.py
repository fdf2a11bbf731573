"""
Common/shared schemas used across the application.
"""
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    database: str


class CursorPage(BaseModel, Generic[T]):
    """One page of a newest-first listing"""
    items: List[T]
    next_cursor: Optional[str] = Field(None, description="Pass back as ?cursor= to fetch the next page")
    has_more: bool = False
