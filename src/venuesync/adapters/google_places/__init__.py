"""Public interface for the Google Places adapter."""

from __future__ import annotations

from .client import GooglePlacesAdapter
from .schema import Place, TextSearchResponse
from .translator import translate_place

__all__ = ["GooglePlacesAdapter", "Place", "TextSearchResponse", "translate_place"]
