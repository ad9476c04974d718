"""
Gig model: a recurring show at a venue, owning a series of events.
"""

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship

from cammcomedy.db.base import Base


class Gig(Base):
    __tablename__ = "gigs"
    # Identifiers are never reused after a delete
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    recurrence = Column(Text, nullable=True)
    venue = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    contact = Column(Text, nullable=True)
    instagram = Column(Text, nullable=True)

    events = relationship("Event", back_populates="gig", order_by="Event.date")

    def __repr__(self) -> str:
        return f"<Gig(id={self.id}, name={self.name})>"
