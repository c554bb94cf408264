"""Canonical record invariants checked before matching."""

from __future__ import annotations

from typing import TYPE_CHECKING

from venuesync.domain.errors import InvalidRecordError
from venuesync.domain.model import MAX_PRICE_TIER, MIN_PRICE_TIER, Category, is_blank

if TYPE_CHECKING:
    from venuesync.config.ingest import ImportConfig
    from venuesync.domain.model import VenueDraft

MISSING_NATIVE_ID = "missing_native_id"
MISSING_NAME_AND_ADDRESS = "missing_name_and_address"
PRICE_TIER_OUT_OF_RANGE = "price_tier_out_of_range"


def validate_draft(draft: VenueDraft, config: ImportConfig) -> None:
    """Raise ``InvalidRecordError`` when ``draft`` cannot become a venue."""

    if is_blank(draft.source.native_id):
        raise InvalidRecordError(MISSING_NATIVE_ID)
    if is_blank(draft.name) and is_blank(draft.address):
        raise InvalidRecordError(MISSING_NAME_AND_ADDRESS)
    if draft.price_tier is not None:
        low, high = price_tier_range(draft.category, config)
        if not low <= draft.price_tier <= high:
            raise InvalidRecordError(PRICE_TIER_OUT_OF_RANGE)


def price_tier_range(category: Category | None, config: ImportConfig) -> tuple[int, int]:
    default = (MIN_PRICE_TIER, MAX_PRICE_TIER)
    if category is None:
        return default
    return config.price_tier_ranges.get(category, default)
