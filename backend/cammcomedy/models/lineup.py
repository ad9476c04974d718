"""
Lineup entry: the assignment of one comic to one role within one event.

Key design decisions:
- Partial unique index on (event_id, role) for MC/HEADLINER rows makes the
  database reject a second MC or Headliner even when two requests race
- Partial unique index on (event_id, position) for COMIC rows rejects two
  supporting comics computing the same next position
- `fee` is free text; no format is imposed
- Comics referenced by a lineup entry cannot be deleted (RESTRICT)
- AUTOINCREMENT ids: a removed entry's id is never handed to a new booking,
  so a stale payment form cannot update someone else's entry
"""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from cammcomedy.db.base import Base

HEADLINE_ROLES_CLAUSE = "role IN ('MC', 'HEADLINER')"
COMIC_ROLE_CLAUSE = "role = 'COMIC'"


class LineupEntry(Base):
    __tablename__ = "lineup"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    comic_id = Column(Integer, ForeignKey("comics.id", ondelete="RESTRICT"), nullable=False, index=True)
    role = Column(String(20), nullable=False)
    position = Column(Integer, nullable=True)
    fee = Column(Text, nullable=True)
    paid = Column(Boolean, nullable=False, default=False)

    event = relationship("Event", back_populates="lineup")
    comic = relationship("Comic", back_populates="lineup_entries")

    __table_args__ = (
        CheckConstraint("role IN ('MC', 'HEADLINER', 'COMIC')", name="check_lineup_role"),
        Index(
            "uq_lineup_event_headline_role",
            "event_id",
            "role",
            unique=True,
            sqlite_where=text(HEADLINE_ROLES_CLAUSE),
            postgresql_where=text(HEADLINE_ROLES_CLAUSE),
        ),
        Index(
            "uq_lineup_event_comic_position",
            "event_id",
            "position",
            unique=True,
            sqlite_where=text(COMIC_ROLE_CLAUSE),
            postgresql_where=text(COMIC_ROLE_CLAUSE),
        ),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<LineupEntry(id={self.id}, event={self.event_id}, comic={self.comic_id}, role={self.role})>"
