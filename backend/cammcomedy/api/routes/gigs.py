"""
Gig endpoints: the show concepts and their scheduled dates.
"""

from fastapi import APIRouter, Depends, status

from cammcomedy.schemas.event import EventCreate, EventResponse
from cammcomedy.schemas.gig import GigCreate, GigDetailResponse, GigResponse
from cammcomedy.services.event_service import create_event
from cammcomedy.services.gig_service import create_gig, get_gig_detail, list_gigs
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.store_factory import get_store

router = APIRouter(prefix="/gigs", tags=["Gigs"])


@router.get("/", response_model=list[GigResponse])
async def list_gigs_endpoint(store: BookingStore = Depends(get_store)):
    return await list_gigs(store)


@router.post("/", response_model=GigResponse, status_code=status.HTTP_201_CREATED)
async def create_gig_endpoint(gig_data: GigCreate, store: BookingStore = Depends(get_store)):
    return await create_gig(store, gig_data)


@router.get("/{gig_id}", response_model=GigDetailResponse)
async def get_gig_endpoint(gig_id: int, store: BookingStore = Depends(get_store)):
    """A gig with every event and its lineup display."""
    return await get_gig_detail(store, gig_id)


@router.post("/{gig_id}/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    gig_id: int,
    event_data: EventCreate,
    store: BookingStore = Depends(get_store),
):
    """Schedule a new date for the gig."""
    return await create_event(store, gig_id, event_data)
