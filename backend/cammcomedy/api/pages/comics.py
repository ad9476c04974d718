"""
Comic pages: the roster and a single comic's profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse

from cammcomedy.api.templating import blank_to_none, require_id, see_other, templates
from cammcomedy.schemas.comic import ComicCreate, ComicUpdate
from cammcomedy.services.comic_service import (
    create_comic,
    delete_comic,
    get_comic,
    list_comics,
    update_comic,
)
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.store_factory import get_store

router = APIRouter()


@router.get("/comics", response_class=HTMLResponse)
async def comics_page(request: Request, store: BookingStore = Depends(get_store)):
    comics = await list_comics(store)
    return templates.TemplateResponse(request, "comics.html", {"comics": comics})


@router.post("/comics")
async def create_comic_form(
    name: str = Form(""),
    bio: str = Form(""),
    notes: str = Form(""),
    contact: str = Form(""),
    fee: str = Form(""),
    store: BookingStore = Depends(get_store),
):
    if name.strip():
        await create_comic(
            store,
            ComicCreate(
                name=name.strip(),
                bio=blank_to_none(bio),
                notes=blank_to_none(notes),
                contact=blank_to_none(contact),
                default_fee=blank_to_none(fee),
            ),
        )
    return see_other("/comics")


@router.get("/comic", response_class=HTMLResponse)
async def comic_page(
    request: Request,
    comic_id: Optional[str] = Query(None, alias="id"),
    store: BookingStore = Depends(get_store),
):
    comic = await get_comic(store, require_id(comic_id))
    return templates.TemplateResponse(request, "comic.html", {"comic": comic})


@router.post("/comic")
async def comic_form(
    comic_id: Optional[str] = Query(None, alias="id"),
    delete: str = Form(""),
    name: str = Form(""),
    bio: str = Form(""),
    notes: str = Form(""),
    contact: str = Form(""),
    fee: str = Form(""),
    store: BookingStore = Depends(get_store),
):
    comic_id = require_id(comic_id)

    if delete:
        await delete_comic(store, comic_id)
        return see_other("/comics")

    if name.strip():
        await update_comic(
            store,
            comic_id,
            ComicUpdate(
                name=name.strip(),
                bio=blank_to_none(bio),
                notes=blank_to_none(notes),
                contact=blank_to_none(contact),
                default_fee=blank_to_none(fee),
            ),
        )
    return see_other("/comics")
