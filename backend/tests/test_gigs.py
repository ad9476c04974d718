"""
Tests for gig pages and endpoints.
"""

import pytest
from httpx import AsyncClient

from cammcomedy.schemas.lineup import Role


@pytest.mark.asyncio
async def test_index_lists_gigs(client: AsyncClient, test_gig):
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Open Mic Night" in response.text
    assert f'href="/gig?id={test_gig.id}"' in response.text


@pytest.mark.asyncio
async def test_create_gig_form(client: AsyncClient, store):
    response = await client.post("/", data={"name": "Late Show", "recurrence": "Fridays", "venue": "Cellar"})
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    gigs = await store.list_gigs()
    assert len(gigs) == 1
    assert gigs[0].name == "Late Show"
    assert gigs[0].venue == "Cellar"
    assert gigs[0].address is None


@pytest.mark.asyncio
async def test_create_gig_blank_name_skipped(client: AsyncClient, store):
    """Blank name is ignored but the response still redirects."""
    response = await client.post("/", data={"name": "  ", "recurrence": "Fridays"})
    assert response.status_code == 303
    assert await store.list_gigs() == []


@pytest.mark.asyncio
async def test_gig_page(client: AsyncClient, store, test_gig, test_event, add_comic):
    host = await add_comic("Host Person")
    await store.create_lineup_entry(test_event.id, host.id, Role.MC, None, None)

    response = await client.get(f"/gig?id={test_gig.id}")
    assert response.status_code == 200
    assert "Open Mic Night" in response.text
    assert "Jan 1, 2024 8:00 PM" in response.text
    assert "Host Person" in response.text


@pytest.mark.asyncio
async def test_gig_page_missing_id(client: AsyncClient):
    response = await client.get("/gig")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_gig_page_not_found(client: AsyncClient):
    response = await client.get("/gig?id=99999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_add_event_form(client: AsyncClient, store, test_gig):
    response = await client.post(f"/gig?id={test_gig.id}", data={"date": "2024-02-02", "time": "19:30"})
    assert response.status_code == 303
    assert response.headers["location"] == f"/gig?id={test_gig.id}"

    events = await store.list_events(test_gig.id)
    assert [(e.date, e.time) for e in events] == [("2024-02-02", "19:30")]


@pytest.mark.asyncio
async def test_add_event_missing_time_skipped(client: AsyncClient, store, test_gig):
    response = await client.post(f"/gig?id={test_gig.id}", data={"date": "2024-02-02"})
    assert response.status_code == 303
    assert await store.list_events(test_gig.id) == []


@pytest.mark.asyncio
async def test_api_create_and_get_gig(client: AsyncClient):
    response = await client.post("/api/v1/gigs/", json={"name": "Comedy Cellar", "instagram": "@cellar"})
    assert response.status_code == 201
    gig = response.json()
    assert gig["name"] == "Comedy Cellar"

    response = await client.post(f"/api/v1/gigs/{gig['id']}/events", json={"date": "2024-05-01", "time": "21:00"})
    assert response.status_code == 201
    assert response.json()["display_name"] == "May 1, 2024 9:00 PM"

    response = await client.get(f"/api/v1/gigs/{gig['id']}")
    assert response.status_code == 200
    data = response.json()
    assert data["gig"]["instagram"] == "@cellar"
    assert len(data["events"]) == 1
    assert data["events"][0]["comics"] == [None] * 6


@pytest.mark.asyncio
async def test_api_create_gig_blank_name(client: AsyncClient):
    response = await client.post("/api/v1/gigs/", json={"name": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_api_list_gigs(client: AsyncClient, test_gig):
    response = await client.get("/api/v1/gigs/")
    assert response.status_code == 200
    assert [g["id"] for g in response.json()] == [test_gig.id]


@pytest.mark.asyncio
async def test_api_event_for_unknown_gig(client: AsyncClient):
    response = await client.post("/api/v1/gigs/99999/events", json={"date": "2024-05-01", "time": "21:00"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_add_event_with_seconds(client: AsyncClient, store, test_gig):
    """Times are stored as submitted; unparseable ones show as raw text."""
    response = await client.post(f"/gig?id={test_gig.id}", data={"date": "2024-02-02", "time": "20:00:00"})
    assert response.status_code == 303

    events = await store.list_events(test_gig.id)
    assert [(e.date, e.time) for e in events] == [("2024-02-02", "20:00:00")]
    assert events[0].display_name == "2024-02-02 20:00:00"

    response = await client.get(f"/gig?id={test_gig.id}")
    assert response.status_code == 200
    assert "2024-02-02 20:00:00" in response.text


@pytest.mark.asyncio
async def test_long_gig_fields_accepted(client: AsyncClient, store):
    venue = "The Back Room of " + "The Crown " * 40
    response = await client.post("/", data={"name": "Late Show", "venue": venue, "instagram": "@" + "a" * 150})
    assert response.status_code == 303
    assert (await store.list_gigs())[0].venue == venue
