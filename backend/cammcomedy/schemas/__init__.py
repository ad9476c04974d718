from cammcomedy.schemas.event import EventCreate, EventNotesUpdate, EventResponse
from cammcomedy.schemas.lineup import (
    EventDisplay,
    LineupEntryCreate,
    LineupEntryResponse,
    PaymentUpdate,
    Role,
)
from cammcomedy.schemas.gig import GigCreate, GigDetailResponse, GigResponse
from cammcomedy.schemas.comic import ComicCreate, ComicResponse, ComicUpdate

__all__ = [
    "GigCreate", "GigResponse", "GigDetailResponse",
    "EventCreate", "EventNotesUpdate", "EventResponse",
    "ComicCreate", "ComicUpdate", "ComicResponse",
    "Role", "LineupEntryCreate", "LineupEntryResponse", "PaymentUpdate", "EventDisplay",
]
