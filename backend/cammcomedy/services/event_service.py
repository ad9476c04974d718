"""
Event service handling creation, lookup and timeline notes.
"""

from typing import Optional

from fastapi import HTTPException, status

from cammcomedy.core.logging import get_logger
from cammcomedy.schemas.event import EventCreate, EventResponse
from cammcomedy.services.interfaces.store import BookingStore, RecordNotFound

logger = get_logger(__name__)


async def create_event(store: BookingStore, gig_id: int, event_data: EventCreate) -> EventResponse:
    """Schedule a new date for a gig."""
    try:
        event = await store.create_event(gig_id, event_data)
    except RecordNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Gig {gig_id} not found",
        )

    logger.info("event_created", event_id=event.id, gig_id=gig_id, date=event.date, time=event.time)
    return event


async def get_event(store: BookingStore, event_id: int) -> EventResponse:
    """Get a single event by ID."""
    event = await store.get_event(event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found",
        )
    return event


async def update_event_notes(store: BookingStore, event_id: int, timeline: Optional[str]) -> EventResponse:
    try:
        event = await store.update_event_notes(event_id, timeline)
    except RecordNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found",
        )

    logger.info("event_notes_updated", event_id=event_id)
    return event
