"""
Store factory.
Configures which BookingStore backs the application and hands the owned
instance to request handlers.
"""

from fastapi import Request

from cammcomedy.core.config import Settings, get_settings
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.json_store import JsonStore
from cammcomedy.services.sql_store import SqlStore


def create_store(settings: Settings | None = None) -> BookingStore:
    """
    Build the configured store.

    STORE_BACKEND selects the implementation:
    - sql: SqlStore on DATABASE_URL (default)
    - json: JsonStore on JSON_DOCUMENT_PATH
    """
    settings = settings or get_settings()
    backend = settings.STORE_BACKEND.lower()

    if backend == "json":
        return JsonStore(settings.JSON_DOCUMENT_PATH)
    if backend == "sql":
        return SqlStore(settings.DATABASE_URL, echo=settings.DEBUG)
    raise ValueError(f"Unknown STORE_BACKEND {settings.STORE_BACKEND!r} (expected 'sql' or 'json')")


def get_store(request: Request) -> BookingStore:
    """FastAPI dependency: the store created by the application lifespan."""
    return request.app.state.store
