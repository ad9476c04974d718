"""
Pydantic schemas for comic-related request/response validation.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ComicCreate(BaseModel):
    name: str = Field(..., min_length=1)
    bio: Optional[str] = None
    notes: Optional[str] = None
    contact: Optional[str] = None
    default_fee: Optional[str] = None


class ComicUpdate(ComicCreate):
    pass


class ComicResponse(BaseModel):
    id: int
    name: str
    bio: Optional[str] = None
    notes: Optional[str] = None
    contact: Optional[str] = None
    default_fee: Optional[str] = None

    model_config = {"from_attributes": True}
