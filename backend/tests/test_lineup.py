"""
Tests for lineup assignment rules, payment updates and removal.
"""

import asyncio

import pytest
from fastapi import HTTPException

from cammcomedy.schemas.event import EventCreate
from cammcomedy.schemas.lineup import Role
from cammcomedy.services.lineup_service import (
    MAX_RETRY_ATTEMPTS,
    assign_role,
    list_lineup,
    remove_lineup_entry,
    update_payment,
)


@pytest.mark.asyncio
async def test_assign_mc(store, test_event, add_comic):
    """First MC is booked without a position."""
    comic = await add_comic("One")
    entry = await assign_role(store, test_event.id, comic.id, Role.MC, "50")

    assert entry.role == Role.MC
    assert entry.position is None
    assert entry.comic_name == "One"
    assert entry.fee == "50"
    assert entry.paid is False


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [Role.MC, Role.HEADLINER])
async def test_second_headline_role_conflicts(store, test_event, add_comic, role):
    """A second MC or Headliner is rejected and the lineup is unchanged."""
    first = await add_comic("First")
    second = await add_comic("Second")
    await assign_role(store, test_event.id, first.id, role)

    with pytest.raises(HTTPException) as exc_info:
        await assign_role(store, test_event.id, second.id, role)

    assert exc_info.value.status_code == 409
    assert exc_info.value.detail == f"{role.value} already assigned"
    lineup = await store.list_lineup(test_event.id)
    assert [(e.role, e.comic_name) for e in lineup] == [(role, "First")]


@pytest.mark.asyncio
async def test_mc_and_headliner_coexist(store, test_event, add_comic):
    mc = await add_comic("Host")
    headliner = await add_comic("Star")
    await assign_role(store, test_event.id, headliner.id, Role.HEADLINER)
    await assign_role(store, test_event.id, mc.id, Role.MC)

    lineup = await store.list_lineup(test_event.id)
    assert [e.role for e in lineup] == [Role.MC, Role.HEADLINER]


@pytest.mark.asyncio
async def test_roles_are_per_event(store, test_gig, test_event, add_comic):
    """An MC on one event does not block the MC of another event."""
    other_event = await store.create_event(test_gig.id, EventCreate(date="2024-01-08", time="20:00"))
    comic = await add_comic("Host")
    await assign_role(store, test_event.id, comic.id, Role.MC)
    entry = await assign_role(store, other_event.id, comic.id, Role.MC)

    assert entry.event_id == other_event.id


@pytest.mark.asyncio
async def test_comic_positions_increase_from_one(store, test_event, add_comic):
    """Three supporting comics get positions 1, 2, 3 in insertion order."""
    names = ["Ann", "Bob", "Cat"]
    for name in names:
        comic = await add_comic(name)
        await assign_role(store, test_event.id, comic.id, Role.COMIC)

    lineup = await store.list_lineup(test_event.id)
    assert [(e.comic_name, e.position) for e in lineup] == [("Ann", 1), ("Bob", 2), ("Cat", 3)]


@pytest.mark.asyncio
async def test_removed_position_is_not_reused(store, test_event, add_comic):
    """Removing an intermediate comic leaves a gap; the next comic goes after the highest."""
    entries = []
    for name in ["Ann", "Bob", "Cat"]:
        comic = await add_comic(name)
        entries.append(await assign_role(store, test_event.id, comic.id, Role.COMIC))

    await remove_lineup_entry(store, entries[1].id)
    dan = await add_comic("Dan")
    entry = await assign_role(store, test_event.id, dan.id, Role.COMIC)

    assert entry.position == 4
    lineup = await store.list_lineup(test_event.id)
    assert [e.position for e in lineup] == [1, 3, 4]


@pytest.mark.asyncio
async def test_same_comic_twice_is_allowed(store, test_event, add_comic):
    comic = await add_comic("Busy")
    await assign_role(store, test_event.id, comic.id, Role.MC)
    entry = await assign_role(store, test_event.id, comic.id, Role.COMIC)

    assert entry.position == 1
    assert len(await store.list_lineup(test_event.id)) == 2


@pytest.mark.asyncio
async def test_assign_unknown_event(store, add_comic):
    comic = await add_comic("One")
    with pytest.raises(HTTPException) as exc_info:
        await assign_role(store, 99999, comic.id, Role.COMIC)
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_assign_unknown_comic(store, test_event):
    with pytest.raises(HTTPException) as exc_info:
        await assign_role(store, test_event.id, 99999, Role.MC)
    assert exc_info.value.status_code == 404
    assert await store.list_lineup(test_event.id) == []


@pytest.mark.asyncio
async def test_concurrent_mc_assignments(store, test_event, add_comic):
    """Simultaneous MC bookings: exactly one wins, the rest get 409."""
    comics = [await add_comic(f"Comic {i}") for i in range(5)]

    results = await asyncio.gather(
        *(assign_role(store, test_event.id, c.id, Role.MC) for c in comics),
        return_exceptions=True,
    )

    successes = [r for r in results if not isinstance(r, Exception)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 1
    assert all(isinstance(f, HTTPException) and f.status_code == 409 for f in failures)
    assert await store.count_role(test_event.id, Role.MC) == 1


@pytest.mark.asyncio
async def test_concurrent_comic_assignments(store, test_event, add_comic):
    """Simultaneous supporting comics are all booked, at positions 1, 2 and 3."""
    comics = [await add_comic(f"Comic {i}") for i in range(3)]

    results = await asyncio.gather(
        *(assign_role(store, test_event.id, c.id, Role.COMIC) for c in comics),
        return_exceptions=True,
    )

    assert not [r for r in results if isinstance(r, Exception)]
    assert sorted(e.position for e in results) == [1, 2, 3]
    lineup = await store.list_lineup(test_event.id)
    assert [e.position for e in lineup] == [1, 2, 3]


@pytest.mark.asyncio
async def test_position_retries_exhausted(store, test_event, add_comic, monkeypatch):
    """A position that stays taken on every attempt ends in 409 without writing."""
    first = await add_comic("First")
    late = await add_comic("Late")
    await assign_role(store, test_event.id, first.id, Role.COMIC)

    calls = []

    async def stale_max_position(event_id):
        calls.append(event_id)
        return 0

    monkeypatch.setattr(store, "max_comic_position", stale_max_position)

    with pytest.raises(HTTPException) as exc_info:
        await assign_role(store, test_event.id, late.id, Role.COMIC)

    assert exc_info.value.status_code == 409
    assert len(calls) == MAX_RETRY_ATTEMPTS
    assert [e.comic_name for e in await store.list_lineup(test_event.id)] == ["First"]


@pytest.mark.asyncio
async def test_update_payment(store, test_event, add_comic):
    comic = await add_comic("One")
    entry = await assign_role(store, test_event.id, comic.id, Role.COMIC, "40")

    updated = await update_payment(store, entry.id, "£45 + drinks", True)

    assert updated.fee == "£45 + drinks"
    assert updated.paid is True
    stored = await store.get_lineup_entry(entry.id)
    assert stored.fee == "£45 + drinks"
    assert stored.paid is True


@pytest.mark.asyncio
async def test_update_payment_unknown_entry(store):
    with pytest.raises(HTTPException) as exc_info:
        await update_payment(store, 99999, "10", True)
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_lineup_orders_roles(store, test_event, add_comic):
    """MC first, then Headliner, then comics by position."""
    for name, role in [("C1", Role.COMIC), ("H", Role.HEADLINER), ("C2", Role.COMIC), ("M", Role.MC)]:
        comic = await add_comic(name)
        await assign_role(store, test_event.id, comic.id, role)

    lineup = await list_lineup(store, test_event.id)
    assert [e.comic_name for e in lineup] == ["M", "H", "C1", "C2"]
