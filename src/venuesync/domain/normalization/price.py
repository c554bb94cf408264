"""Price encodings to the 1..5 tier scale."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from venuesync.domain.model import MAX_PRICE_TIER, MIN_PRICE_TIER

from .text import collapse_whitespace

if TYPE_CHECKING:
    from collections.abc import Mapping

# Lower bound of a typical ticket or entry price per tier, highest first.
AMOUNT_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (300.0, 5),
    (120.0, 4),
    (60.0, 3),
    (25.0, 2),
)
_AMOUNT = re.compile(r"^\$?\s*(\d{1,6}(?:,\d{3})*(?:\.\d+)?)$")


def tier_from_amount(amount: float) -> int | None:
    if amount < 0:
        return None
    for threshold, tier in AMOUNT_THRESHOLDS:
        if amount >= threshold:
            return tier
    return MIN_PRICE_TIER


def price_tier(value: str | float | None, table: Mapping[str, int]) -> int | None:
    """Derive a tier from a provider price value.

    Numbers are monetary amounts. Strings are looked up in ``table``, first as
    a whole and then by the longest table entry they contain as a word; a
    string that is itself an amount (``"$45.00"``) maps like a number.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return tier_from_amount(float(value))
    text = collapse_whitespace(value).casefold()
    if not text:
        return None
    if text in table:
        return _checked(table[text])
    padded = f" {text} "
    contained = [key for key in table if f" {key} " in padded]
    if contained:
        return _checked(table[max(contained, key=len)])
    amount = _AMOUNT.match(text)
    if amount:
        return tier_from_amount(float(amount.group(1).replace(",", "")))
    return None


def _checked(tier: int) -> int | None:
    if MIN_PRICE_TIER <= tier <= MAX_PRICE_TIER:
        return tier
    return None
