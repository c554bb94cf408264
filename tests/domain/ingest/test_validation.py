from __future__ import annotations

import pytest

from tests.helpers.venues import make_draft
from venuesync.config import ImportConfig
from venuesync.domain.errors import InvalidRecordError
from venuesync.domain.ingest import (
    MISSING_NAME_AND_ADDRESS,
    MISSING_NATIVE_ID,
    PRICE_TIER_OUT_OF_RANGE,
    price_tier_range,
    validate_draft,
)
from venuesync.domain.model import Category


def test_complete_draft_is_valid() -> None:
    validate_draft(make_draft("yelp-1", price_tier=3), ImportConfig())


@pytest.mark.parametrize(
    ("name", "street"),
    [("Joe's Pizza", None), (None, "123 Collins Ave")],
)
def test_name_or_address_alone_is_enough(name: str | None, street: str | None) -> None:
    validate_draft(make_draft("yelp-1", name, street=street), ImportConfig())


def test_draft_without_name_and_address_is_rejected() -> None:
    with pytest.raises(InvalidRecordError) as excinfo:
        validate_draft(make_draft("yelp-1", "  ", street=None), ImportConfig())

    assert excinfo.value.reason == MISSING_NAME_AND_ADDRESS


def test_draft_without_native_id_is_rejected() -> None:
    with pytest.raises(InvalidRecordError) as excinfo:
        validate_draft(make_draft(" "), ImportConfig())

    assert excinfo.value.reason == MISSING_NATIVE_ID


@pytest.mark.parametrize(
    ("category", "tier", "valid"),
    [
        (Category.NATURE, 3, True),
        (Category.NATURE, 4, False),
        (Category.DINING, 5, True),
        (Category.DINING, 0, False),
        (None, 6, False),
    ],
)
def test_price_tier_range_depends_on_category(
    category: Category | None, tier: int, *, valid: bool
) -> None:
    draft = make_draft("nps-1", category=category, price_tier=tier)

    if valid:
        validate_draft(draft, ImportConfig())
        return
    with pytest.raises(InvalidRecordError) as excinfo:
        validate_draft(draft, ImportConfig())
    assert excinfo.value.reason == PRICE_TIER_OUT_OF_RANGE


def test_price_tier_range_defaults_to_full_scale() -> None:
    assert price_tier_range(Category.NIGHTLIFE, ImportConfig()) == (1, 5)
    assert price_tier_range(Category.NATURE, ImportConfig()) == (1, 3)
