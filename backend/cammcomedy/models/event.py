"""
Event model: one dated occurrence of a gig.

Key design decisions:
- `date` and `time` are stored exactly as submitted by the date/time inputs
  (normally YYYY-MM-DD and HH:MM, which sort chronologically as text)
- `timeline` holds free-text running order notes
- Deleting an event removes its lineup entries
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from cammcomedy.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    gig_id = Column(Integer, ForeignKey("gigs.id", ondelete="RESTRICT"), nullable=False)
    date = Column(Text, nullable=False)
    time = Column(Text, nullable=False)
    timeline = Column(Text, nullable=True)

    gig = relationship("Gig", back_populates="events")
    lineup = relationship(
        "LineupEntry",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        # Gig pages list events by date
        Index("ix_events_gig_date", "gig_id", "date"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, gig={self.gig_id}, date={self.date} {self.time})>"
