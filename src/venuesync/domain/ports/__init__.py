"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ProviderAdapter, ProviderQuery, RawItem
from .persistence import CandidateFilter, VenueStore

__all__ = [
    "CandidateFilter",
    "ProviderAdapter",
    "ProviderQuery",
    "RawItem",
    "VenueStore",
]
