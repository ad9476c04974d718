"""
Comic model: a performer reusable across many events.
"""

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship

from cammcomedy.db.base import Base


class Comic(Base):
    __tablename__ = "comics"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False, index=True)
    bio = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    contact = Column(Text, nullable=True)
    default_fee = Column(Text, nullable=True)

    lineup_entries = relationship("LineupEntry", back_populates="comic", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Comic(id={self.id}, name={self.name})>"
