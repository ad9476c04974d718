"""
Gig pages: the gig index and a single gig with its events.

Form posts with a blank required field are skipped and redirected as if
they had succeeded.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse

from cammcomedy.api.templating import blank_to_none, redirect_back, require_id, see_other, templates
from cammcomedy.schemas.event import EventCreate
from cammcomedy.schemas.gig import GigCreate
from cammcomedy.services.event_service import create_event
from cammcomedy.services.gig_service import create_gig, get_gig_detail, list_gigs
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.store_factory import get_store

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def gigs_page(request: Request, store: BookingStore = Depends(get_store)):
    gigs = await list_gigs(store)
    return templates.TemplateResponse(request, "index.html", {"gigs": gigs})


@router.post("/")
async def create_gig_form(
    name: str = Form(""),
    recurrence: str = Form(""),
    venue: str = Form(""),
    address: str = Form(""),
    description: str = Form(""),
    contact: str = Form(""),
    instagram: str = Form(""),
    store: BookingStore = Depends(get_store),
):
    if name.strip():
        await create_gig(
            store,
            GigCreate(
                name=name.strip(),
                recurrence=blank_to_none(recurrence),
                venue=blank_to_none(venue),
                address=blank_to_none(address),
                description=blank_to_none(description),
                contact=blank_to_none(contact),
                instagram=blank_to_none(instagram),
            ),
        )
    return see_other("/")


@router.get("/gig", response_class=HTMLResponse)
async def gig_page(
    request: Request,
    gig_id: Optional[str] = Query(None, alias="id"),
    store: BookingStore = Depends(get_store),
):
    detail = await get_gig_detail(store, require_id(gig_id))
    return templates.TemplateResponse(
        request,
        "gig.html",
        {"gig": detail.gig, "events": detail.events},
    )


@router.post("/gig")
async def add_event_form(
    request: Request,
    gig_id: Optional[str] = Query(None, alias="id"),
    date: str = Form(""),
    time: str = Form(""),
    store: BookingStore = Depends(get_store),
):
    gig_id = require_id(gig_id)
    if date.strip() and time.strip():
        await create_event(store, gig_id, EventCreate(date=date.strip(), time=time.strip()))
    return redirect_back(request)
