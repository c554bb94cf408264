"""Public interface for the National Park Service adapter."""

from __future__ import annotations

from .client import NpsAdapter
from .schema import Park, ParksResponse
from .translator import translate_park

__all__ = ["NpsAdapter", "Park", "ParksResponse", "translate_park"]
