"""
Relational BookingStore backed by SQLAlchemy's async ORM.

Each operation runs in its own short transaction. Uniqueness of the MC and
Headliner roles, and of supporting comic positions, is enforced by partial
unique indexes (see models/lineup.py); a violation surfaces here as an
IntegrityError and is re-raised as ConstraintViolation so the lineup service
can tell a conflict from a storage failure.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import case, delete, func, select
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import IntegrityError

from cammcomedy.core.logging import get_logger
from cammcomedy.db.base import Base
from cammcomedy.db.session import create_engine, create_session_factory
from cammcomedy.models import Comic, Event, Gig, LineupEntry
from cammcomedy.schemas.comic import ComicCreate, ComicResponse, ComicUpdate
from cammcomedy.schemas.event import EventCreate, EventResponse
from cammcomedy.schemas.gig import GigCreate, GigResponse
from cammcomedy.schemas.lineup import LineupEntryResponse, Role
from cammcomedy.services.interfaces.store import BookingStore, ConstraintViolation, RecordNotFound

logger = get_logger(__name__)

_role_rank = case(
    (LineupEntry.role == Role.MC.value, 0),
    (LineupEntry.role == Role.HEADLINER.value, 1),
    else_=2,
)


def _lineup_response(entry: LineupEntry, comic_name: Optional[str]) -> LineupEntryResponse:
    return LineupEntryResponse(
        id=entry.id,
        event_id=entry.event_id,
        comic_id=entry.comic_id,
        comic_name=comic_name,
        role=entry.role,
        position=entry.position,
        fee=entry.fee,
        paid=bool(entry.paid),
    )


class SqlStore(BookingStore):
    backend = "sql"

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo)
        self.session_factory = create_session_factory(self.engine)

    async def init(self) -> None:
        url = make_url(self.database_url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("sql_store_ready", url=url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self.engine.dispose()

    # Gigs

    async def create_gig(self, data: GigCreate) -> GigResponse:
        async with self.session_factory.begin() as session:
            gig = Gig(**data.model_dump())
            session.add(gig)
            await session.flush()
            return GigResponse.model_validate(gig)

    async def get_gig(self, gig_id: int) -> Optional[GigResponse]:
        async with self.session_factory() as session:
            gig = await session.get(Gig, gig_id)
            return GigResponse.model_validate(gig) if gig else None

    async def list_gigs(self) -> list[GigResponse]:
        async with self.session_factory() as session:
            result = await session.execute(select(Gig).order_by(Gig.id))
            return [GigResponse.model_validate(g) for g in result.scalars().all()]

    async def update_gig(self, gig_id: int, data: GigCreate) -> GigResponse:
        async with self.session_factory.begin() as session:
            gig = await session.get(Gig, gig_id)
            if not gig:
                raise RecordNotFound("Gig", gig_id)
            for field, value in data.model_dump().items():
                setattr(gig, field, value)
            await session.flush()
            return GigResponse.model_validate(gig)

    async def delete_gig(self, gig_id: int) -> None:
        async with self.session_factory.begin() as session:
            gig = await session.get(Gig, gig_id)
            if not gig:
                raise RecordNotFound("Gig", gig_id)
            event_count = await session.scalar(
                select(func.count()).select_from(Event).where(Event.gig_id == gig_id)
            )
            if event_count:
                raise ConstraintViolation(f"Gig {gig_id} still has {event_count} events")
            await session.delete(gig)

    # Events

    async def create_event(self, gig_id: int, data: EventCreate) -> EventResponse:
        async with self.session_factory.begin() as session:
            if not await session.get(Gig, gig_id):
                raise RecordNotFound("Gig", gig_id)
            event = Event(gig_id=gig_id, **data.model_dump())
            session.add(event)
            await session.flush()
            return EventResponse.model_validate(event)

    async def get_event(self, event_id: int) -> Optional[EventResponse]:
        async with self.session_factory() as session:
            event = await session.get(Event, event_id)
            return EventResponse.model_validate(event) if event else None

    async def list_events(self, gig_id: int) -> list[EventResponse]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Event).where(Event.gig_id == gig_id).order_by(Event.date, Event.id)
            )
            return [EventResponse.model_validate(e) for e in result.scalars().all()]

    async def update_event_notes(self, event_id: int, timeline: Optional[str]) -> EventResponse:
        async with self.session_factory.begin() as session:
            event = await session.get(Event, event_id)
            if not event:
                raise RecordNotFound("Event", event_id)
            event.timeline = timeline
            await session.flush()
            return EventResponse.model_validate(event)

    async def delete_event(self, event_id: int) -> None:
        async with self.session_factory.begin() as session:
            event = await session.get(Event, event_id)
            if not event:
                raise RecordNotFound("Event", event_id)
            await session.execute(delete(LineupEntry).where(LineupEntry.event_id == event_id))
            await session.execute(delete(Event).where(Event.id == event_id))

    # Comics

    async def create_comic(self, data: ComicCreate) -> ComicResponse:
        async with self.session_factory.begin() as session:
            comic = Comic(**data.model_dump())
            session.add(comic)
            await session.flush()
            return ComicResponse.model_validate(comic)

    async def get_comic(self, comic_id: int) -> Optional[ComicResponse]:
        async with self.session_factory() as session:
            comic = await session.get(Comic, comic_id)
            return ComicResponse.model_validate(comic) if comic else None

    async def list_comics(self) -> list[ComicResponse]:
        async with self.session_factory() as session:
            result = await session.execute(select(Comic).order_by(Comic.name, Comic.id))
            return [ComicResponse.model_validate(c) for c in result.scalars().all()]

    async def update_comic(self, comic_id: int, data: ComicUpdate) -> ComicResponse:
        async with self.session_factory.begin() as session:
            comic = await session.get(Comic, comic_id)
            if not comic:
                raise RecordNotFound("Comic", comic_id)
            for field, value in data.model_dump().items():
                setattr(comic, field, value)
            await session.flush()
            return ComicResponse.model_validate(comic)

    async def delete_comic(self, comic_id: int) -> None:
        async with self.session_factory.begin() as session:
            comic = await session.get(Comic, comic_id)
            if not comic:
                raise RecordNotFound("Comic", comic_id)
            bookings = await session.scalar(
                select(func.count()).select_from(LineupEntry).where(LineupEntry.comic_id == comic_id)
            )
            if bookings:
                raise ConstraintViolation(f"Comic {comic_id} is booked in {bookings} lineup entries")
            await session.execute(delete(Comic).where(Comic.id == comic_id))

    # Lineup

    async def create_lineup_entry(
        self,
        event_id: int,
        comic_id: int,
        role: Role,
        position: Optional[int],
        fee: Optional[str],
    ) -> LineupEntryResponse:
        try:
            async with self.session_factory.begin() as session:
                entry = LineupEntry(
                    event_id=event_id,
                    comic_id=comic_id,
                    role=role.value,
                    position=position,
                    fee=fee,
                    paid=False,
                )
                session.add(entry)
                await session.flush()
                comic_name = await session.scalar(select(Comic.name).where(Comic.id == comic_id))
                return _lineup_response(entry, comic_name)
        except IntegrityError as e:
            raise ConstraintViolation(str(e.orig)) from e

    async def get_lineup_entry(self, lineup_id: int) -> Optional[LineupEntryResponse]:
        async with self.session_factory() as session:
            row = (
                await session.execute(
                    select(LineupEntry, Comic.name)
                    .join(Comic, LineupEntry.comic_id == Comic.id)
                    .where(LineupEntry.id == lineup_id)
                )
            ).first()
            return _lineup_response(*row) if row else None

    async def list_lineup(self, event_id: int) -> list[LineupEntryResponse]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(LineupEntry, Comic.name)
                .join(Comic, LineupEntry.comic_id == Comic.id)
                .where(LineupEntry.event_id == event_id)
                .order_by(_role_rank, LineupEntry.position, LineupEntry.id)
            )
            return [_lineup_response(entry, name) for entry, name in result.all()]

    async def count_role(self, event_id: int, role: Role) -> int:
        async with self.session_factory() as session:
            return await session.scalar(
                select(func.count())
                .select_from(LineupEntry)
                .where(LineupEntry.event_id == event_id, LineupEntry.role == role.value)
            )

    async def max_comic_position(self, event_id: int) -> int:
        async with self.session_factory() as session:
            return await session.scalar(
                select(func.coalesce(func.max(LineupEntry.position), 0)).where(
                    LineupEntry.event_id == event_id,
                    LineupEntry.role == Role.COMIC.value,
                )
            )

    async def update_lineup_payment(self, lineup_id: int, fee: Optional[str], paid: bool) -> LineupEntryResponse:
        async with self.session_factory.begin() as session:
            entry = await session.get(LineupEntry, lineup_id)
            if not entry:
                raise RecordNotFound("Lineup entry", lineup_id)
            entry.fee = fee
            entry.paid = paid
            await session.flush()
            comic_name = await session.scalar(select(Comic.name).where(Comic.id == entry.comic_id))
            return _lineup_response(entry, comic_name)

    async def delete_lineup_entry(self, lineup_id: int) -> None:
        async with self.session_factory.begin() as session:
            entry = await session.get(LineupEntry, lineup_id)
            if not entry:
                raise RecordNotFound("Lineup entry", lineup_id)
            await session.delete(entry)
