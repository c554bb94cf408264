"""Venue domain model."""

from __future__ import annotations

from .enums import Category, Provider, RecordStatus, ReviewFlag, VenueField
from .venue import (
    MAX_PRICE_TIER,
    MIN_PRICE_TIER,
    Address,
    Coordinates,
    FieldPatch,
    NewVenue,
    SourceRef,
    StoredVenue,
    VenueDraft,
    is_blank,
    price_display,
)

__all__ = [
    "MAX_PRICE_TIER",
    "MIN_PRICE_TIER",
    "Address",
    "Category",
    "Coordinates",
    "FieldPatch",
    "NewVenue",
    "Provider",
    "RecordStatus",
    "ReviewFlag",
    "SourceRef",
    "StoredVenue",
    "VenueDraft",
    "VenueField",
    "is_blank",
    "price_display",
]
