"""
Event page: lineup, notes and the assignment form.

POST /event?id= carries one of several forms; the fields present decide
which one:
- update_notes: save the timeline notes
- lineup_id: update fee and paid flag of a lineup entry
- remove_lineup_id: remove a lineup entry
- otherwise comic_id + role (+ fee): book a comic into the lineup
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse

from cammcomedy.api.templating import blank_to_none, redirect_back, require_id, templates
from cammcomedy.schemas.lineup import Role
from cammcomedy.services.comic_service import list_comics
from cammcomedy.services.event_service import update_event_notes
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.lineup_service import (
    assign_role,
    build_event_display,
    list_lineup,
    remove_lineup_entry,
    update_payment,
)
from cammcomedy.services.store_factory import get_store

router = APIRouter()


@router.get("/event", response_class=HTMLResponse)
async def event_page(
    request: Request,
    event_id: Optional[str] = Query(None, alias="id"),
    store: BookingStore = Depends(get_store),
):
    event_id = require_id(event_id)
    display = await build_event_display(store, event_id)
    return templates.TemplateResponse(
        request,
        "event.html",
        {
            "event": display.event,
            "display": display,
            "lineup": await list_lineup(store, event_id),
            "comics": await list_comics(store),
        },
    )


@router.post("/event")
async def event_form(
    request: Request,
    event_id: Optional[str] = Query(None, alias="id"),
    update_notes: str = Form(""),
    notes: str = Form(""),
    lineup_id: str = Form(""),
    remove_lineup_id: str = Form(""),
    comic_id: str = Form(""),
    role: str = Form(""),
    fee: str = Form(""),
    paid: str = Form(""),
    store: BookingStore = Depends(get_store),
):
    event_id = require_id(event_id)

    if update_notes:
        await update_event_notes(store, event_id, notes)
        return redirect_back(request)

    if lineup_id:
        await update_payment(store, require_id(lineup_id), blank_to_none(fee), paid=bool(paid))
        return redirect_back(request)

    if remove_lineup_id:
        await remove_lineup_entry(store, require_id(remove_lineup_id))
        return redirect_back(request)

    if comic_id and role:
        try:
            lineup_role = Role(role.upper())
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown role {role!r}",
            )
        await assign_role(store, event_id, require_id(comic_id), lineup_role, blank_to_none(fee))

    return redirect_back(request)
