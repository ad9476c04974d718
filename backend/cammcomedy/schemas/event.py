"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field


def format_event_name(date: str, time: str) -> str:
    """Render "2024-01-05" + "20:00" as "Jan 5, 2024 8:00 PM", or the raw text if unparseable."""
    try:
        t = datetime.strptime(f"{date} {time}", "%Y-%m-%d %H:%M")
    except ValueError:
        return f"{date} {time}"
    return f"{t:%b} {t.day}, {t.year} {t.hour % 12 or 12}:{t:%M %p}"


class EventCreate(BaseModel):
    date: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    timeline: Optional[str] = None


class EventNotesUpdate(BaseModel):
    timeline: Optional[str] = None


class EventResponse(BaseModel):
    id: int
    gig_id: int
    date: str
    time: str
    timeline: Optional[str] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def display_name(self) -> str:
        return format_event_name(self.date, self.time)
