"""
Pydantic schemas for lineup entries and the per-event lineup display.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from cammcomedy.schemas.event import EventResponse


class Role(str, Enum):
    MC = "MC"
    HEADLINER = "HEADLINER"
    COMIC = "COMIC"


# Roles limited to one entry per event
HEADLINE_ROLES = (Role.MC, Role.HEADLINER)


class LineupEntryCreate(BaseModel):
    comic_id: int
    role: Role
    fee: Optional[str] = None


class PaymentUpdate(BaseModel):
    fee: Optional[str] = None
    paid: bool = False


class LineupEntryResponse(BaseModel):
    id: int
    event_id: int
    comic_id: int
    comic_name: Optional[str] = None
    role: Role
    position: Optional[int] = None
    fee: Optional[str] = None
    paid: bool = False

    model_config = {"from_attributes": True}


class EventDisplay(BaseModel):
    event: EventResponse
    mc: Optional[str] = None
    headliner: Optional[str] = None
    comics: list[Optional[str]]
    capacity: int
    over_capacity: bool = False

# Display order of roles within an event's lineup
ROLE_ORDER = {Role.MC: 0, Role.HEADLINER: 1, Role.COMIC: 2}
