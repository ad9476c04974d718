"""
Pydantic schemas for gig-related request/response validation.
"""

from typing import Optional

from pydantic import BaseModel, Field

from cammcomedy.schemas.lineup import EventDisplay


class GigCreate(BaseModel):
    name: str = Field(..., min_length=1)
    recurrence: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    contact: Optional[str] = None
    instagram: Optional[str] = None


class GigResponse(BaseModel):
    id: int
    name: str
    recurrence: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    contact: Optional[str] = None
    instagram: Optional[str] = None

    model_config = {"from_attributes": True}


class GigDetailResponse(BaseModel):
    gig: GigResponse
    events: list[EventDisplay]
