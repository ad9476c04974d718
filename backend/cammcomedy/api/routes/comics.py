"""
Comic endpoints with Redis caching on the roster listing.
"""

from fastapi import APIRouter, Depends, Response, status

from cammcomedy.schemas.comic import ComicCreate, ComicResponse, ComicUpdate
from cammcomedy.services.comic_service import (
    create_comic,
    delete_comic,
    get_comic,
    list_comics,
    update_comic,
)
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.store_factory import get_store

router = APIRouter(prefix="/comics", tags=["Comics"])


@router.get("/", response_model=list[ComicResponse])
async def list_comics_endpoint(store: BookingStore = Depends(get_store)):
    """All comics ordered by name."""
    return await list_comics(store)


@router.post("/", response_model=ComicResponse, status_code=status.HTTP_201_CREATED)
async def create_comic_endpoint(comic_data: ComicCreate, store: BookingStore = Depends(get_store)):
    return await create_comic(store, comic_data)


@router.get("/{comic_id}", response_model=ComicResponse)
async def get_comic_endpoint(comic_id: int, store: BookingStore = Depends(get_store)):
    return await get_comic(store, comic_id)


@router.put("/{comic_id}", response_model=ComicResponse)
async def update_comic_endpoint(
    comic_id: int,
    comic_data: ComicUpdate,
    store: BookingStore = Depends(get_store),
):
    return await update_comic(store, comic_id, comic_data)


@router.delete("/{comic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comic_endpoint(comic_id: int, store: BookingStore = Depends(get_store)):
    """Delete a comic. Returns 409 while the comic is booked in any lineup."""
    await delete_comic(store, comic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
