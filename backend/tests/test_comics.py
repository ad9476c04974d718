"""
Tests for comic pages and endpoints.
"""

import pytest
from httpx import AsyncClient

from cammcomedy.schemas.lineup import Role


@pytest.mark.asyncio
async def test_comics_page_sorted(client: AsyncClient, add_comic):
    await add_comic("Zed")
    await add_comic("Anna")

    response = await client.get("/comics")
    assert response.status_code == 200
    assert response.text.index("Anna") < response.text.index("Zed")


@pytest.mark.asyncio
async def test_create_comic_form(client: AsyncClient, store):
    response = await client.post("/comics", data={"name": "Ann", "bio": "Deadpan", "fee": "50"})
    assert response.status_code == 303
    assert response.headers["location"] == "/comics"

    comics = await store.list_comics()
    assert [(c.name, c.bio, c.default_fee, c.notes) for c in comics] == [("Ann", "Deadpan", "50", None)]


@pytest.mark.asyncio
async def test_create_comic_blank_name_skipped(client: AsyncClient, store):
    response = await client.post("/comics", data={"name": "", "bio": "Nobody"})
    assert response.status_code == 303
    assert await store.list_comics() == []


@pytest.mark.asyncio
async def test_comic_page(client: AsyncClient, add_comic):
    comic = await add_comic("Ann", contact="ann@example.com")
    response = await client.get(f"/comic?id={comic.id}")
    assert response.status_code == 200
    assert "ann@example.com" in response.text


@pytest.mark.asyncio
async def test_comic_page_not_found(client: AsyncClient):
    assert (await client.get("/comic?id=99999")).status_code == 404
    assert (await client.get("/comic")).status_code == 404
    assert (await client.get("/comic?id=abc")).status_code == 404


@pytest.mark.asyncio
async def test_update_comic_form(client: AsyncClient, store, add_comic):
    comic = await add_comic("Ann")
    response = await client.post(
        f"/comic?id={comic.id}",
        data={"name": "Ann B", "notes": "Prefers early slot", "fee": "60"},
    )
    assert response.status_code == 303
    stored = await store.get_comic(comic.id)
    assert (stored.name, stored.notes, stored.default_fee) == ("Ann B", "Prefers early slot", "60")


@pytest.mark.asyncio
async def test_delete_comic_form(client: AsyncClient, store, add_comic):
    comic = await add_comic("Ann")
    response = await client.post(f"/comic?id={comic.id}", data={"delete": "1"})
    assert response.status_code == 303
    assert response.headers["location"] == "/comics"
    assert await store.get_comic(comic.id) is None


@pytest.mark.asyncio
async def test_delete_booked_comic_refused(client: AsyncClient, store, test_event, add_comic):
    comic = await add_comic("Ann")
    await store.create_lineup_entry(test_event.id, comic.id, Role.MC, None, None)

    response = await client.post(f"/comic?id={comic.id}", data={"delete": "1"})
    assert response.status_code == 409
    assert await store.get_comic(comic.id) is not None


@pytest.mark.asyncio
async def test_api_comics_crud(client: AsyncClient):
    response = await client.post("/api/v1/comics/", json={"name": "Zed"})
    assert response.status_code == 201
    await client.post("/api/v1/comics/", json={"name": "Anna", "default_fee": "45"})

    response = await client.get("/api/v1/comics/")
    assert [c["name"] for c in response.json()] == ["Anna", "Zed"]

    comic_id = response.json()[1]["id"]
    response = await client.put(f"/api/v1/comics/{comic_id}", json={"name": "Zed Z", "bio": "Loud"})
    assert response.status_code == 200
    assert response.json()["bio"] == "Loud"

    response = await client.delete(f"/api/v1/comics/{comic_id}")
    assert response.status_code == 204
    assert (await client.get(f"/api/v1/comics/{comic_id}")).status_code == 404


@pytest.mark.asyncio
async def test_api_list_comics_empty(client: AsyncClient):
    response = await client.get("/api/v1/comics/")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_long_free_text_fields_accepted(client: AsyncClient, store):
    """Fee and contact are free text of any length."""
    fee = "£50 on the door, plus two drinks tokens and a share of the bucket money"
    contact = "agent: " + "x" * 300 + "@example.com"

    response = await client.post("/comics", data={"name": "Ann", "fee": fee, "contact": contact})
    assert response.status_code == 303

    comic = (await store.list_comics())[0]
    assert (comic.default_fee, comic.contact) == (fee, contact)

    response = await client.post(f"/comic?id={comic.id}", data={"name": "Ann " * 100, "fee": fee + "!"})
    assert response.status_code == 303
    assert (await store.get_comic(comic.id)).default_fee == fee + "!"


@pytest.mark.asyncio
async def test_api_long_fee_accepted(client: AsyncClient):
    fee = "£" + "5" * 80
    response = await client.post("/api/v1/comics/", json={"name": "Ann", "default_fee": fee})
    assert response.status_code == 201
    assert response.json()["default_fee"] == fee
