"""
Persistence capability interface.
Lets the relational store and the JSON document store serve the same
services without the services knowing which one is behind them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cammcomedy.schemas.comic import ComicCreate, ComicResponse, ComicUpdate
from cammcomedy.schemas.event import EventCreate, EventResponse
from cammcomedy.schemas.gig import GigCreate, GigResponse
from cammcomedy.schemas.lineup import LineupEntryResponse, Role


class StoreError(Exception):
    """Base class for persistence errors raised by a BookingStore."""


class RecordNotFound(StoreError):
    def __init__(self, entity: str, record_id: int):
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class ConstraintViolation(StoreError):
    """A write would break a uniqueness or reference rule of the store."""


class BookingStore(ABC):
    """
    Create/read/update/delete for gigs, events, comics and lineup entries.

    Implementations:
    - SqlStore: SQLAlchemy async ORM (SQLite by default, PostgreSQL supported)
    - JsonStore: a single JSON document on disk

    Conventions shared by every implementation:
    - get_* return None for an unknown id; update_* and delete_* raise
      RecordNotFound
    - create_lineup_entry raises ConstraintViolation when the event already
      has the MC/Headliner role, or the COMIC position, being inserted
    - delete_comic raises ConstraintViolation while lineup entries reference
      the comic; delete_gig does the same while the gig owns events;
      delete_event removes the event's lineup entries
    """

    backend: str = "abstract"

    async def init(self) -> None:
        """Prepare storage (create tables, load the document)."""

    async def close(self) -> None:
        """Release resources held by the store."""

    # Gigs

    @abstractmethod
    async def create_gig(self, data: GigCreate) -> GigResponse:
        pass

    @abstractmethod
    async def get_gig(self, gig_id: int) -> Optional[GigResponse]:
        pass

    @abstractmethod
    async def list_gigs(self) -> list[GigResponse]:
        """All gigs ordered by id."""

    @abstractmethod
    async def update_gig(self, gig_id: int, data: GigCreate) -> GigResponse:
        pass

    @abstractmethod
    async def delete_gig(self, gig_id: int) -> None:
        pass

    # Events

    @abstractmethod
    async def create_event(self, gig_id: int, data: EventCreate) -> EventResponse:
        pass

    @abstractmethod
    async def get_event(self, event_id: int) -> Optional[EventResponse]:
        pass

    @abstractmethod
    async def list_events(self, gig_id: int) -> list[EventResponse]:
        """Events of one gig ordered by date, then id."""

    @abstractmethod
    async def update_event_notes(self, event_id: int, timeline: Optional[str]) -> EventResponse:
        pass

    @abstractmethod
    async def delete_event(self, event_id: int) -> None:
        pass

    # Comics

    @abstractmethod
    async def create_comic(self, data: ComicCreate) -> ComicResponse:
        pass

    @abstractmethod
    async def get_comic(self, comic_id: int) -> Optional[ComicResponse]:
        pass

    @abstractmethod
    async def list_comics(self) -> list[ComicResponse]:
        """All comics ordered by name (codepoint order)."""

    @abstractmethod
    async def update_comic(self, comic_id: int, data: ComicUpdate) -> ComicResponse:
        pass

    @abstractmethod
    async def delete_comic(self, comic_id: int) -> None:
        pass

    # Lineup

    @abstractmethod
    async def create_lineup_entry(
        self,
        event_id: int,
        comic_id: int,
        role: Role,
        position: Optional[int],
        fee: Optional[str],
    ) -> LineupEntryResponse:
        pass

    @abstractmethod
    async def get_lineup_entry(self, lineup_id: int) -> Optional[LineupEntryResponse]:
        pass

    @abstractmethod
    async def list_lineup(self, event_id: int) -> list[LineupEntryResponse]:
        """Entries of one event with comic names: MC, HEADLINER, then COMIC by position."""

    @abstractmethod
    async def count_role(self, event_id: int, role: Role) -> int:
        pass

    @abstractmethod
    async def max_comic_position(self, event_id: int) -> int:
        """Highest COMIC position in the event, 0 when there is none."""

    @abstractmethod
    async def update_lineup_payment(self, lineup_id: int, fee: Optional[str], paid: bool) -> LineupEntryResponse:
        pass

    @abstractmethod
    async def delete_lineup_entry(self, lineup_id: int) -> None:
        pass
