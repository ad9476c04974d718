from cammcomedy.models.gig import Gig
from cammcomedy.models.event import Event
from cammcomedy.models.comic import Comic
from cammcomedy.models.lineup import LineupEntry

__all__ = ["Gig", "Event", "Comic", "LineupEntry"]
