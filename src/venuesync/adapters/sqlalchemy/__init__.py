"""SQLAlchemy adapter package for venuesync."""

from __future__ import annotations

from .mappings import metadata, venue_source_table, venue_table
from .store import (
    SqlAlchemyVenueStore,
    StartupError,
    configured_engine,
    engine_for,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyVenueStore",
    "StartupError",
    "configured_engine",
    "engine_for",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
    "venue_source_table",
    "venue_table",
]
