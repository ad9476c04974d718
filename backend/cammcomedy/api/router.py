"""
Central routers: the JSON API under /api/v1 and the server-rendered pages.
"""

from fastapi import APIRouter

from cammcomedy.api.pages import comics as comic_pages
from cammcomedy.api.pages import events as event_pages
from cammcomedy.api.pages import gigs as gig_pages
from cammcomedy.api.routes import comics, events, gigs, lineup

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(gigs.router)
api_router.include_router(events.router)
api_router.include_router(lineup.router)
api_router.include_router(comics.router)

pages_router = APIRouter(include_in_schema=False)
pages_router.include_router(gig_pages.router)
pages_router.include_router(event_pages.router)
pages_router.include_router(comic_pages.router)
