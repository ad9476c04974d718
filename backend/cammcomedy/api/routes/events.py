"""
Event endpoints: lineup display, notes and role assignment.
"""

from fastapi import APIRouter, Depends, status

from cammcomedy.schemas.event import EventNotesUpdate, EventResponse
from cammcomedy.schemas.lineup import EventDisplay, LineupEntryCreate, LineupEntryResponse
from cammcomedy.services.event_service import update_event_notes
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.lineup_service import assign_role, build_event_display, list_lineup
from cammcomedy.services.store_factory import get_store

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("/{event_id}", response_model=EventDisplay)
async def get_event_endpoint(event_id: int, store: BookingStore = Depends(get_store)):
    """Event with MC, Headliner and numbered comic slots."""
    return await build_event_display(store, event_id)


@router.patch("/{event_id}/notes", response_model=EventResponse)
async def update_notes_endpoint(
    event_id: int,
    notes: EventNotesUpdate,
    store: BookingStore = Depends(get_store),
):
    return await update_event_notes(store, event_id, notes.timeline)


@router.get("/{event_id}/lineup", response_model=list[LineupEntryResponse])
async def list_lineup_endpoint(event_id: int, store: BookingStore = Depends(get_store)):
    return await list_lineup(store, event_id)


@router.post("/{event_id}/lineup", response_model=LineupEntryResponse, status_code=status.HTTP_201_CREATED)
async def assign_role_endpoint(
    event_id: int,
    entry: LineupEntryCreate,
    store: BookingStore = Depends(get_store),
):
    """
    Book a comic into the event.

    A second MC or Headliner returns 409. Supporting comics get the next
    free position automatically.
    """
    return await assign_role(store, event_id, entry.comic_id, entry.role, entry.fee)
