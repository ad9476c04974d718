"""Booking manager for a recurring comedy show: gigs, events, comics and lineups."""

__version__ = "1.0.0"
