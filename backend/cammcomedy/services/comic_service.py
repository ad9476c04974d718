"""
Comic service: the performer roster.

The roster listing goes through the Redis cache (see cache_service); every
write invalidates it.
"""

from fastapi import HTTPException, status

from cammcomedy.core.logging import get_logger
from cammcomedy.schemas.comic import ComicCreate, ComicResponse, ComicUpdate
from cammcomedy.services.cache_service import (
    get_cached_roster,
    invalidate_roster_cache,
    set_cached_roster,
)
from cammcomedy.services.interfaces.store import BookingStore, ConstraintViolation, RecordNotFound

logger = get_logger(__name__)


async def create_comic(store: BookingStore, comic_data: ComicCreate) -> ComicResponse:
    comic = await store.create_comic(comic_data)
    await invalidate_roster_cache()
    logger.info("comic_created", comic_id=comic.id, name=comic.name)
    return comic


async def list_comics(store: BookingStore) -> list[ComicResponse]:
    """All comics ordered by name."""
    cached = await get_cached_roster()
    if cached is not None:
        return [ComicResponse.model_validate(c) for c in cached]

    comics = await store.list_comics()
    await set_cached_roster([c.model_dump() for c in comics])
    return comics


async def get_comic(store: BookingStore, comic_id: int) -> ComicResponse:
    comic = await store.get_comic(comic_id)
    if not comic:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comic {comic_id} not found",
        )
    return comic


async def update_comic(store: BookingStore, comic_id: int, comic_data: ComicUpdate) -> ComicResponse:
    try:
        comic = await store.update_comic(comic_id, comic_data)
    except RecordNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comic {comic_id} not found",
        )
    await invalidate_roster_cache()
    logger.info("comic_updated", comic_id=comic_id)
    return comic


async def delete_comic(store: BookingStore, comic_id: int) -> None:
    """
    Delete a comic.
    Comics still booked in a lineup are kept and a 409 is returned, so
    past lineups and their payment records stay intact.
    """
    try:
        await store.delete_comic(comic_id)
    except RecordNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comic {comic_id} not found",
        )
    except ConstraintViolation as e:
        logger.warning("comic_delete_refused", comic_id=comic_id, reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Comic is booked in a lineup and cannot be deleted",
        )
    await invalidate_roster_cache()
    logger.info("comic_deleted", comic_id=comic_id)
