from __future__ import annotations

import uuid

import pytest

from tests.helpers.venues import make_draft, make_stored_venue
from venuesync.domain.model import Provider, SourceRef
from venuesync.domain.resolution import (
    AmbiguousMatch,
    MatchExisting,
    MatchKind,
    NoMatch,
    ResolutionStatus,
    resolve,
)


def test_resolve_without_candidates_is_no_match() -> None:
    result = resolve(make_draft("yelp-1"), [])

    assert isinstance(result, NoMatch)
    assert result.status is ResolutionStatus.NO_MATCH
    assert result.reason == "no_candidates"


def test_exact_source_reference_wins_over_everything_else() -> None:
    draft = make_draft("yelp-1", "Completely Renamed", street="9 Elsewhere Rd")
    stored = make_stored_venue(
        uuid.uuid4(), "Joe's Pizza", sources=(SourceRef(Provider.YELP, "yelp-1"),)
    )
    decoy = make_stored_venue(uuid.uuid4(), "Completely Renamed", street="9 Elsewhere Rd")

    result = resolve(draft, [decoy, stored])

    assert isinstance(result, MatchExisting)
    assert result.venue_id == stored.id
    assert result.match_kind is MatchKind.EXACT_SOURCE


def test_contained_name_at_same_address_is_a_strong_match() -> None:
    stored = make_stored_venue(uuid.uuid4(), "Joe's Pizza & Pasta", street="123 Collins Avenue")

    result = resolve(make_draft("yelp-1", "Joe's Pizza", street="123 Collins Ave"), [stored])

    assert isinstance(result, MatchExisting)
    assert result.venue_id == stored.id
    assert result.match_kind is MatchKind.STRONG


def test_unrelated_name_at_same_address_is_ambiguous() -> None:
    stored = make_stored_venue(uuid.uuid4(), "Ace Hardware")

    result = resolve(make_draft("yelp-1", "Joe's Pizza"), [stored])

    assert isinstance(result, AmbiguousMatch)
    assert result.venue_ids == (stored.id,)
    assert result.match_kind is MatchKind.WEAK
    assert result.reason == "same_address_different_name"


def test_several_strong_candidates_are_ambiguous() -> None:
    first = make_stored_venue(uuid.uuid4(), "Joe's Pizza")
    second = make_stored_venue(uuid.uuid4(), "Joe's Pizza & Pasta")

    result = resolve(make_draft("yelp-1", "Joe's Pizza"), [first, second])

    assert isinstance(result, AmbiguousMatch)
    assert set(result.venue_ids) == {first.id, second.id}
    assert result.match_kind is MatchKind.STRONG


def test_same_name_with_missing_address_is_ambiguous() -> None:
    stored = make_stored_venue(uuid.uuid4(), "Joe's Pizza")

    result = resolve(make_draft("yelp-1", "JOE'S PIZZA", street=None), [stored])

    assert isinstance(result, AmbiguousMatch)
    assert result.match_kind is MatchKind.NAME_ONLY


def test_same_name_at_different_address_is_no_match() -> None:
    stored = make_stored_venue(uuid.uuid4(), "Joe's Pizza", street="900 Lincoln Rd")

    result = resolve(make_draft("yelp-1", "Joe's Pizza"), [stored])

    assert isinstance(result, NoMatch)
    assert result.reason == "no_tier_matched"


def test_duplicate_candidates_are_considered_once() -> None:
    stored = make_stored_venue(uuid.uuid4(), "Joe's Pizza")

    result = resolve(make_draft("yelp-1", "Joe's Pizza"), [stored, stored])

    assert isinstance(result, MatchExisting)


def test_ambiguous_match_requires_candidates() -> None:
    with pytest.raises(ValueError, match="at least one candidate"):
        AmbiguousMatch(venue_ids=(), match_kind=MatchKind.WEAK)


def test_same_street_in_another_city_is_no_match() -> None:
    stored = make_stored_venue(uuid.uuid4(), "Joe's Pizza", city="Orlando")

    result = resolve(make_draft("yelp-1", "Joe's Pizza", city="Miami"), [stored])

    assert isinstance(result, NoMatch)


def test_postal_codes_decide_over_city_spelling() -> None:
    stored = make_stored_venue(
        uuid.uuid4(), "Joe's Pizza", city="Miami", postal_code="33139-1234"
    )
    elsewhere = make_stored_venue(
        uuid.uuid4(), "Joe's Pizza", city="Miami Beach", postal_code="32801"
    )

    result = resolve(
        make_draft("yelp-1", "Joe's Pizza", city="Miami Beach", postal_code="33139"),
        [elsewhere, stored],
    )

    assert isinstance(result, MatchExisting)
    assert result.venue_id == stored.id


def test_unrelated_name_on_same_street_elsewhere_is_not_ambiguous() -> None:
    stored = make_stored_venue(uuid.uuid4(), "Ace Hardware", postal_code="32801")

    result = resolve(make_draft("yelp-1", "Joe's Pizza", postal_code="33139"), [stored])

    assert isinstance(result, NoMatch)
