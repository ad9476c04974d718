"""
Cammcomedy - Main Application Entry Point

Booking manager for a recurring comedy show:
- Gigs, their dated events, and a roster of comics
- Lineups with one MC, one Headliner and automatically numbered comic slots
- Server-rendered pages with form posts, plus a JSON API under /api/v1
- SQL (SQLAlchemy) or single-JSON-document storage
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from cammcomedy.api.middleware import RequestLoggingMiddleware
from cammcomedy.api.router import api_router, pages_router
from cammcomedy.core.config import get_settings
from cammcomedy.core.logging import get_logger, setup_logging
from cammcomedy.core.metrics import metrics_endpoint
from cammcomedy.services.cache_service import close_redis, get_cache_stats, get_redis
from cammcomedy.services.store_factory import create_store

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: the store is opened at startup and closed at shutdown."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        store_backend=settings.STORE_BACKEND,
    )

    store = create_store(settings)
    await store.init()
    app.state.store = store

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.info("redis_unavailable", message="Running without roster cache")

    yield

    await close_redis()
    await store.close()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Booking manager for a recurring comedy show",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestLoggingMiddleware)

app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")
app.include_router(api_router)
app.include_router(pages_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "store": settings.STORE_BACKEND,
        "cache": cache_stats,
    }


@app.get("/metrics", include_in_schema=False)
def metrics():
    return metrics_endpoint()


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    uvicorn.run("cammcomedy.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
