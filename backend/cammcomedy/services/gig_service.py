"""
Gig service: creating gigs and assembling a gig page with its events.
"""

from fastapi import HTTPException, status

from cammcomedy.core.config import get_settings
from cammcomedy.core.logging import get_logger
from cammcomedy.schemas.gig import GigCreate, GigDetailResponse, GigResponse
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.lineup_service import arrange_lineup

logger = get_logger(__name__)


async def create_gig(store: BookingStore, gig_data: GigCreate) -> GigResponse:
    gig = await store.create_gig(gig_data)
    logger.info("gig_created", gig_id=gig.id, name=gig.name)
    return gig


async def list_gigs(store: BookingStore) -> list[GigResponse]:
    return await store.list_gigs()


async def get_gig(store: BookingStore, gig_id: int) -> GigResponse:
    """Get a single gig by ID."""
    gig = await store.get_gig(gig_id)
    if not gig:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Gig {gig_id} not found",
        )
    return gig


async def get_gig_detail(store: BookingStore, gig_id: int) -> GigDetailResponse:
    """A gig with each of its events and their lineup displays, ordered by date."""
    gig = await get_gig(store, gig_id)
    capacity = get_settings().LINEUP_SLOT_CAPACITY

    displays = []
    for event in await store.list_events(gig_id):
        entries = await store.list_lineup(event.id)
        displays.append(arrange_lineup(event, entries, capacity))

    return GigDetailResponse(gig=gig, events=displays)
