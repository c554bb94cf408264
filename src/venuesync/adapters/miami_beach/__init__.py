"""Public interface for the Miami Beach registry adapter."""

from __future__ import annotations

from .client import MiamiBeachAdapter
from .schema import Business, BusinessSearchResponse
from .translator import split_full_address, translate_business

__all__ = [
    "Business",
    "BusinessSearchResponse",
    "MiamiBeachAdapter",
    "split_full_address",
    "translate_business",
]
