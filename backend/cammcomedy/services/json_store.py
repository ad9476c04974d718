"""
BookingStore kept in a single JSON document.

Document layout:

    {"gigs": [...], "events": [...], "comics": [...], "lineup": [...],
     "sequences": {"gigs": 3, ...}}

Each record is a flat object using the same field names as the relational
tables. Identifiers come from a per-collection counter kept in "sequences",
so the id of a deleted record is never handed out again.

All mutations run under one asyncio.Lock. The document is rewritten in full
after every mutation (temp file + os.replace), and the in-memory copy is
rolled back if that write fails, so memory and disk never disagree. The lock
also makes the lineup uniqueness checks atomic with the insert.
"""

import asyncio
import copy
import json
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional

from cammcomedy.core.logging import get_logger
from cammcomedy.schemas.comic import ComicCreate, ComicResponse, ComicUpdate
from cammcomedy.schemas.event import EventCreate, EventResponse
from cammcomedy.schemas.gig import GigCreate, GigResponse
from cammcomedy.schemas.lineup import HEADLINE_ROLES, ROLE_ORDER, LineupEntryResponse, Role
from cammcomedy.services.interfaces.store import BookingStore, ConstraintViolation, RecordNotFound

logger = get_logger(__name__)

COLLECTIONS = ("gigs", "events", "comics", "lineup")
# Last id handed out per collection
SEQUENCES = "sequences"

Record = dict[str, Any]


def _next_id(doc: dict[str, Any], collection: str) -> int:
    """Allocate the next id of a collection. Ids of deleted records are never reused."""
    sequences = doc[SEQUENCES]
    last_id = max(sequences.get(collection, 0), max((r["id"] for r in doc[collection]), default=0))
    sequences[collection] = last_id + 1
    return last_id + 1


def _find(records: list[Record], record_id: int) -> Optional[Record]:
    for record in records:
        if record["id"] == record_id:
            return record
    return None


class JsonStore(BookingStore):
    backend = "json"

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._doc: dict[str, Any] = {name: [] for name in COLLECTIONS}
        self._doc[SEQUENCES] = {}
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        if self.path.exists():
            raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            doc = json.loads(raw) if raw.strip() else {}
            self._doc = {name: list(doc.get(name, [])) for name in COLLECTIONS}
            self._doc[SEQUENCES] = dict(doc.get(SEQUENCES, {}))
        logger.info(
            "json_store_ready",
            path=str(self.path),
            **{name: len(self._doc[name]) for name in COLLECTIONS},
        )

    def _write_document(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self.path)

    @asynccontextmanager
    async def _mutation(self):
        async with self._lock:
            snapshot = copy.deepcopy(self._doc)
            try:
                yield self._doc
                payload = json.dumps(self._doc, indent=2, ensure_ascii=False)
                await asyncio.to_thread(self._write_document, payload)
            except BaseException:
                self._doc = snapshot
                raise

    def _comic_name(self, comic_id: int) -> Optional[str]:
        comic = _find(self._doc["comics"], comic_id)
        return comic["name"] if comic else None

    def _lineup_response(self, record: Record) -> LineupEntryResponse:
        return LineupEntryResponse(comic_name=self._comic_name(record["comic_id"]), **record)

    # Gigs

    async def create_gig(self, data: GigCreate) -> GigResponse:
        async with self._mutation() as doc:
            record = {"id": _next_id(doc, "gigs"), **data.model_dump()}
            doc["gigs"].append(record)
        return GigResponse.model_validate(record)

    async def get_gig(self, gig_id: int) -> Optional[GigResponse]:
        record = _find(self._doc["gigs"], gig_id)
        return GigResponse.model_validate(record) if record else None

    async def list_gigs(self) -> list[GigResponse]:
        return [GigResponse.model_validate(r) for r in sorted(self._doc["gigs"], key=lambda r: r["id"])]

    async def update_gig(self, gig_id: int, data: GigCreate) -> GigResponse:
        async with self._mutation() as doc:
            record = _find(doc["gigs"], gig_id)
            if not record:
                raise RecordNotFound("Gig", gig_id)
            record.update(data.model_dump())
        return GigResponse.model_validate(record)

    async def delete_gig(self, gig_id: int) -> None:
        async with self._mutation() as doc:
            if not _find(doc["gigs"], gig_id):
                raise RecordNotFound("Gig", gig_id)
            event_count = sum(1 for e in doc["events"] if e["gig_id"] == gig_id)
            if event_count:
                raise ConstraintViolation(f"Gig {gig_id} still has {event_count} events")
            doc["gigs"] = [g for g in doc["gigs"] if g["id"] != gig_id]

    # Events

    async def create_event(self, gig_id: int, data: EventCreate) -> EventResponse:
        async with self._mutation() as doc:
            if not _find(doc["gigs"], gig_id):
                raise RecordNotFound("Gig", gig_id)
            record = {"id": _next_id(doc, "events"), "gig_id": gig_id, **data.model_dump()}
            doc["events"].append(record)
        return EventResponse.model_validate(record)

    async def get_event(self, event_id: int) -> Optional[EventResponse]:
        record = _find(self._doc["events"], event_id)
        return EventResponse.model_validate(record) if record else None

    async def list_events(self, gig_id: int) -> list[EventResponse]:
        events = [e for e in self._doc["events"] if e["gig_id"] == gig_id]
        events.sort(key=lambda e: (e["date"], e["id"]))
        return [EventResponse.model_validate(e) for e in events]

    async def update_event_notes(self, event_id: int, timeline: Optional[str]) -> EventResponse:
        async with self._mutation() as doc:
            record = _find(doc["events"], event_id)
            if not record:
                raise RecordNotFound("Event", event_id)
            record["timeline"] = timeline
        return EventResponse.model_validate(record)

    async def delete_event(self, event_id: int) -> None:
        async with self._mutation() as doc:
            if not _find(doc["events"], event_id):
                raise RecordNotFound("Event", event_id)
            doc["lineup"] = [entry for entry in doc["lineup"] if entry["event_id"] != event_id]
            doc["events"] = [e for e in doc["events"] if e["id"] != event_id]

    # Comics

    async def create_comic(self, data: ComicCreate) -> ComicResponse:
        async with self._mutation() as doc:
            record = {"id": _next_id(doc, "comics"), **data.model_dump()}
            doc["comics"].append(record)
        return ComicResponse.model_validate(record)

    async def get_comic(self, comic_id: int) -> Optional[ComicResponse]:
        record = _find(self._doc["comics"], comic_id)
        return ComicResponse.model_validate(record) if record else None

    async def list_comics(self) -> list[ComicResponse]:
        comics = sorted(self._doc["comics"], key=lambda c: (c["name"], c["id"]))
        return [ComicResponse.model_validate(c) for c in comics]

    async def update_comic(self, comic_id: int, data: ComicUpdate) -> ComicResponse:
        async with self._mutation() as doc:
            record = _find(doc["comics"], comic_id)
            if not record:
                raise RecordNotFound("Comic", comic_id)
            record.update(data.model_dump())
        return ComicResponse.model_validate(record)

    async def delete_comic(self, comic_id: int) -> None:
        async with self._mutation() as doc:
            if not _find(doc["comics"], comic_id):
                raise RecordNotFound("Comic", comic_id)
            bookings = sum(1 for entry in doc["lineup"] if entry["comic_id"] == comic_id)
            if bookings:
                raise ConstraintViolation(f"Comic {comic_id} is booked in {bookings} lineup entries")
            doc["comics"] = [c for c in doc["comics"] if c["id"] != comic_id]

    # Lineup

    async def create_lineup_entry(
        self,
        event_id: int,
        comic_id: int,
        role: Role,
        position: Optional[int],
        fee: Optional[str],
    ) -> LineupEntryResponse:
        async with self._mutation() as doc:
            if not _find(doc["events"], event_id):
                raise ConstraintViolation(f"Event {event_id} does not exist")
            if not _find(doc["comics"], comic_id):
                raise ConstraintViolation(f"Comic {comic_id} does not exist")

            siblings = [entry for entry in doc["lineup"] if entry["event_id"] == event_id]
            if role in HEADLINE_ROLES and any(entry["role"] == role.value for entry in siblings):
                raise ConstraintViolation(f"Event {event_id} already has a {role.value}")
            if role == Role.COMIC and any(
                entry["role"] == Role.COMIC.value and entry["position"] == position for entry in siblings
            ):
                raise ConstraintViolation(f"Event {event_id} already has a comic at position {position}")

            record = {
                "id": _next_id(doc, "lineup"),
                "event_id": event_id,
                "comic_id": comic_id,
                "role": role.value,
                "position": position,
                "fee": fee,
                "paid": False,
            }
            doc["lineup"].append(record)
        return self._lineup_response(record)

    async def get_lineup_entry(self, lineup_id: int) -> Optional[LineupEntryResponse]:
        record = _find(self._doc["lineup"], lineup_id)
        return self._lineup_response(record) if record else None

    async def list_lineup(self, event_id: int) -> list[LineupEntryResponse]:
        entries = [entry for entry in self._doc["lineup"] if entry["event_id"] == event_id]
        entries.sort(key=lambda e: (ROLE_ORDER[Role(e["role"])], e["position"] or 0, e["id"]))
        return [self._lineup_response(entry) for entry in entries]

    async def count_role(self, event_id: int, role: Role) -> int:
        return sum(
            1 for entry in self._doc["lineup"]
            if entry["event_id"] == event_id and entry["role"] == role.value
        )

    async def max_comic_position(self, event_id: int) -> int:
        return max(
            (
                entry["position"] or 0
                for entry in self._doc["lineup"]
                if entry["event_id"] == event_id and entry["role"] == Role.COMIC.value
            ),
            default=0,
        )

    async def update_lineup_payment(self, lineup_id: int, fee: Optional[str], paid: bool) -> LineupEntryResponse:
        async with self._mutation() as doc:
            record = _find(doc["lineup"], lineup_id)
            if not record:
                raise RecordNotFound("Lineup entry", lineup_id)
            record["fee"] = fee
            record["paid"] = paid
        return self._lineup_response(record)

    async def delete_lineup_entry(self, lineup_id: int) -> None:
        async with self._mutation() as doc:
            if not _find(doc["lineup"], lineup_id):
                raise RecordNotFound("Lineup entry", lineup_id)
            doc["lineup"] = [entry for entry in doc["lineup"] if entry["id"] != lineup_id]
