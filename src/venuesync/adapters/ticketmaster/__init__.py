"""Public interface for the Ticketmaster adapter."""

from __future__ import annotations

from .client import TicketmasterAdapter
from .schema import Event, EventSearchResponse
from .translator import translate_event

__all__ = ["Event", "EventSearchResponse", "TicketmasterAdapter", "translate_event"]
