"""
Lineup service: role assignment, payment updates and the event display.

ASSIGNMENT RULES
================

  - MC and HEADLINER: at most one per event. A second assignment is
    rejected with 409 and nothing is written.
  - COMIC: position = max(existing COMIC positions in the event) + 1, or 1
    for the first. Positions are never compacted, so removing an
    intermediate comic leaves a gap that is never refilled.
  - The same comic may be booked more than once in an event.

CONCURRENCY
===========

The rules above are a read-then-write sequence, so two simultaneous
requests can both pass the check. The store backs every rule with a
constraint enforced at insert time (partial unique indexes in SQL, the
write lock in the JSON store):

  1. Check the role / compute the next position
  2. Insert the entry
  3. On ConstraintViolation:
       - MC/HEADLINER: another request won the race -> 409
       - COMIC: another comic took this position -> recompute and retry,
         up to MAX_RETRY_ATTEMPTS, then 409
"""

import time
from typing import Optional

from fastapi import HTTPException, status

from cammcomedy.core.config import get_settings
from cammcomedy.core.logging import get_logger
from cammcomedy.core.metrics import (
    lineup_assignment_latency,
    lineup_position_retries,
    record_lineup_assignment,
)
from cammcomedy.schemas.event import EventResponse
from cammcomedy.schemas.lineup import HEADLINE_ROLES, EventDisplay, LineupEntryResponse, Role
from cammcomedy.services.event_service import get_event
from cammcomedy.services.interfaces.store import BookingStore, ConstraintViolation, RecordNotFound

logger = get_logger(__name__)

MAX_RETRY_ATTEMPTS = 3


async def assign_role(
    store: BookingStore,
    event_id: int,
    comic_id: int,
    role: Role,
    fee: Optional[str] = None,
) -> LineupEntryResponse:
    """Add a comic to an event's lineup, enforcing the role and position rules."""
    start_time = time.perf_counter()
    try:
        entry = await _assign_role(store, event_id, comic_id, role, fee)
    except HTTPException as e:
        record_lineup_assignment(role.value, "conflict" if e.status_code == status.HTTP_409_CONFLICT else "error")
        raise
    except Exception:
        record_lineup_assignment(role.value, "error")
        raise
    finally:
        lineup_assignment_latency.observe(time.perf_counter() - start_time)

    record_lineup_assignment(role.value, "success")
    return entry


async def _assign_role(
    store: BookingStore,
    event_id: int,
    comic_id: int,
    role: Role,
    fee: Optional[str],
) -> LineupEntryResponse:
    await get_event(store, event_id)
    if not await store.get_comic(comic_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comic {comic_id} not found",
        )

    if role in HEADLINE_ROLES:
        if await store.count_role(event_id, role):
            logger.warning("lineup_role_conflict", event_id=event_id, role=role.value, comic_id=comic_id)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{role.value} already assigned",
            )
        try:
            entry = await store.create_lineup_entry(event_id, comic_id, role, None, fee)
        except ConstraintViolation:
            # A concurrent request assigned the role between check and insert
            logger.warning(
                "lineup_role_conflict",
                event_id=event_id,
                role=role.value,
                comic_id=comic_id,
                reason="concurrent_assignment",
            )
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{role.value} already assigned",
            )
    else:
        for attempt in range(1, MAX_RETRY_ATTEMPTS + 1):
            position = await store.max_comic_position(event_id) + 1
            try:
                entry = await store.create_lineup_entry(event_id, comic_id, role, position, fee)
                break
            except ConstraintViolation:
                lineup_position_retries.inc()
                logger.info(
                    "lineup_position_retry",
                    event_id=event_id,
                    position=position,
                    attempt=attempt,
                    reason="position_taken",
                )
                if attempt == MAX_RETRY_ATTEMPTS:
                    raise HTTPException(
                        status_code=status.HTTP_409_CONFLICT,
                        detail="Lineup changed while booking. Please try again.",
                    )

    logger.info(
        "lineup_entry_created",
        lineup_id=entry.id,
        event_id=event_id,
        comic_id=comic_id,
        role=entry.role.value,
        position=entry.position,
    )
    return entry


async def list_lineup(store: BookingStore, event_id: int) -> list[LineupEntryResponse]:
    await get_event(store, event_id)
    return await store.list_lineup(event_id)


async def update_payment(
    store: BookingStore,
    lineup_id: int,
    fee: Optional[str],
    paid: bool,
) -> LineupEntryResponse:
    """Set fee and paid flag of a lineup entry. The fee is stored as given."""
    try:
        entry = await store.update_lineup_payment(lineup_id, fee, paid)
    except RecordNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lineup entry {lineup_id} not found",
        )
    logger.info("lineup_payment_updated", lineup_id=lineup_id, fee=fee, paid=paid)
    return entry


async def remove_lineup_entry(store: BookingStore, lineup_id: int) -> None:
    try:
        await store.delete_lineup_entry(lineup_id)
    except RecordNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lineup entry {lineup_id} not found",
        )
    logger.info("lineup_entry_removed", lineup_id=lineup_id)


def arrange_lineup(
    event: EventResponse,
    entries: list[LineupEntryResponse],
    capacity: int,
) -> EventDisplay:
    """
    Place lineup entries into the display: MC, Headliner, then comic slots.

    Comics go to slot `position - 1`. Entries without a usable position, or
    whose slot is already taken, fill the first empty slot. The slot list
    starts at `capacity` and grows instead of dropping anyone.
    """
    mc = headliner = None
    slots: list[Optional[str]] = [None] * capacity
    unplaced: list[Optional[str]] = []

    for entry in entries:
        if entry.role == Role.MC:
            mc = entry.comic_name
        elif entry.role == Role.HEADLINER:
            headliner = entry.comic_name
        elif entry.position and entry.position > 0:
            index = entry.position - 1
            if index >= len(slots):
                slots.extend([None] * (index + 1 - len(slots)))
            if slots[index] is None:
                slots[index] = entry.comic_name
            else:
                unplaced.append(entry.comic_name)
        else:
            unplaced.append(entry.comic_name)

    for name in unplaced:
        if None in slots:
            slots[slots.index(None)] = name
        else:
            slots.append(name)

    over_capacity = len(slots) > capacity
    if over_capacity:
        logger.warning(
            "lineup_capacity_exceeded",
            event_id=event.id,
            capacity=capacity,
            slots=len(slots),
        )

    return EventDisplay(
        event=event,
        mc=mc,
        headliner=headliner,
        comics=slots,
        capacity=capacity,
        over_capacity=over_capacity,
    )


async def build_event_display(
    store: BookingStore,
    event_id: int,
    capacity: Optional[int] = None,
) -> EventDisplay:
    event = await get_event(store, event_id)
    entries = await store.list_lineup(event_id)
    return arrange_lineup(event, entries, capacity or get_settings().LINEUP_SLOT_CAPACITY)
