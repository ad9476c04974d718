"""
Pytest fixtures for the store, HTTP client and sample records.

Every store-backed test runs twice: once against a SQLite file through
SqlStore and once against a JSON document through JsonStore, both created
fresh in tmp_path.
"""

from typing import AsyncGenerator, Awaitable, Callable

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cammcomedy.main import app
from cammcomedy.schemas.comic import ComicCreate, ComicResponse
from cammcomedy.schemas.event import EventCreate, EventResponse
from cammcomedy.schemas.gig import GigCreate, GigResponse
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.json_store import JsonStore
from cammcomedy.services.sql_store import SqlStore
from cammcomedy.services.store_factory import get_store


def make_store(backend: str, tmp_path) -> BookingStore:
    if backend == "sql":
        return SqlStore(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    return JsonStore(tmp_path / "test.json")


@pytest_asyncio.fixture(params=["sql", "json"])
async def store(request, tmp_path) -> AsyncGenerator[BookingStore, None]:
    """A freshly initialised, empty store."""
    store = make_store(request.param, tmp_path)
    await store.init()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def client(store: BookingStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the store dependency with the test store."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_gig(store: BookingStore) -> GigResponse:
    return await store.create_gig(GigCreate(name="Open Mic Night", recurrence="Every Tuesday"))


@pytest_asyncio.fixture
async def test_event(store: BookingStore, test_gig: GigResponse) -> EventResponse:
    return await store.create_event(test_gig.id, EventCreate(date="2024-01-01", time="20:00"))


@pytest_asyncio.fixture
async def add_comic(store: BookingStore) -> Callable[..., Awaitable[ComicResponse]]:
    """Factory creating comics by name."""

    async def _add(name: str, **fields) -> ComicResponse:
        return await store.create_comic(ComicCreate(name=name, **fields))

    return _add
