from __future__ import annotations

from venuesync.config import ImportConfig
from venuesync.domain.model import (
    Address,
    Category,
    Coordinates,
    Provider,
    ReviewFlag,
    SourceRef,
    VenueDraft,
)
from venuesync.domain.normalization import normalize_draft


def _raw_draft(**overrides: object) -> VenueDraft:
    values: dict[str, object] = {
        "source": SourceRef(Provider.YELP, "joes-pizza-miami-beach"),
        "name": " joe's   pizza ",
        "source_categories": ("pizza", "restaurants"),
        "tags": frozenset({" Pizza ", "Italian"}),
        "raw_price": "$$",
        "address": Address(street="123 Collins Ave", coordinates=Coordinates(25.78, -80.13)),
        "phone": "(305) 555-0100",
        "website": "joespizza.com",
        "description": "<b>Best</b> slice on the beach",
    }
    values.update(overrides)
    return VenueDraft(**values)  # type: ignore[arg-type]


def test_normalize_draft_normalizes_every_field() -> None:
    draft = normalize_draft(_raw_draft(), ImportConfig())

    assert draft.name == "Joe's Pizza"
    assert draft.category is Category.DINING
    assert draft.tags == frozenset({"Pizza", "Italian"})
    assert draft.price_tier == 2
    assert draft.price_display == "$$"
    assert draft.phone == "+13055550100"
    assert draft.website == "https://joespizza.com"
    assert draft.description == "Best slice on the beach"
    assert draft.address is not None
    assert draft.address.key == "123 collins avenue"
    assert draft.address.neighborhood == "South Beach"
    assert not draft.review_flags


def test_normalize_draft_is_idempotent() -> None:
    config = ImportConfig()
    once = normalize_draft(_raw_draft(), config)

    assert normalize_draft(once, config) == once


def test_normalize_draft_flags_low_confidence_fields() -> None:
    draft = normalize_draft(
        _raw_draft(phone="ext. 42", source_categories=("laundromat",)), ImportConfig()
    )

    assert draft.phone == "ext. 42"
    assert draft.category is Category.UNCATEGORIZED
    assert "laundromat" in draft.tags
    assert draft.review_flags == frozenset(
        {ReviewFlag.PHONE_UNNORMALIZED, ReviewFlag.CATEGORY_UNMAPPED}
    )
    assert draft.needs_review


def test_normalize_draft_never_raises_on_sparse_input() -> None:
    draft = normalize_draft(
        VenueDraft(source=SourceRef(Provider.NPS, "abc"), raw_price="n/a"), ImportConfig()
    )

    assert draft.name is None
    assert draft.address is None
    assert draft.price_tier is None
    assert draft.category is Category.UNCATEGORIZED


def test_normalize_draft_keeps_adapter_category() -> None:
    draft = normalize_draft(
        _raw_draft(category=Category.CULTURE, source_categories=("laundromat",)), ImportConfig()
    )

    assert draft.category is Category.CULTURE
    assert ReviewFlag.CATEGORY_UNMAPPED not in draft.review_flags
