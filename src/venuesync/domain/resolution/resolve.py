"""Tiered matching of a normalized draft against stored venues.

Tiers are tried in order and the first one that yields a candidate decides:

1. exact source reference
2. strong: equal address keys in the same locality and name keys contained in
   one another
3. weak: equal address keys in the same locality, unrelated names
4. name only: identical name keys where an address is missing

The resolver only adjudicates the candidates it is handed; fetching them is
the coordinator's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from venuesync.domain.normalization import contains_words, name_key

from .contracts import AmbiguousMatch, MatchExisting, MatchKind, NoMatch

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from venuesync.domain.model import Address, StoredVenue, VenueDraft

    from .contracts import Resolution


def resolve(draft: VenueDraft, candidates: Sequence[StoredVenue]) -> Resolution:
    candidates = _dedupe(candidates)
    if not candidates:
        return NoMatch(reason="no_candidates")

    for candidate in candidates:
        if draft.source in candidate.sources:
            return MatchExisting(
                venue_id=candidate.id,
                match_kind=MatchKind.EXACT_SOURCE,
                reason="source_reference",
            )

    draft_name = name_key(draft.name)
    draft_address = _address_key(draft.address)

    same_address = [
        candidate
        for candidate in candidates
        if draft_address is not None
        and _address_key(candidate.address) == draft_address
        and _same_locality(draft.address, candidate.address)
    ]
    strong = [
        candidate
        for candidate in same_address
        if _names_related(draft_name, name_key(candidate.name))
    ]
    if len(strong) == 1:
        return MatchExisting(
            venue_id=strong[0].id,
            match_kind=MatchKind.STRONG,
            reason="address_and_name",
        )
    if strong:
        return AmbiguousMatch(
            venue_ids=_ids(strong),
            match_kind=MatchKind.STRONG,
            reason="multiple_strong_matches",
        )
    if same_address:
        return AmbiguousMatch(
            venue_ids=_ids(same_address),
            match_kind=MatchKind.WEAK,
            reason="same_address_different_name",
        )

    if draft_name is not None:
        name_only = [
            candidate
            for candidate in candidates
            if name_key(candidate.name) == draft_name
            and (draft_address is None or _address_key(candidate.address) is None)
        ]
        if name_only:
            return AmbiguousMatch(
                venue_ids=_ids(name_only),
                match_kind=MatchKind.NAME_ONLY,
                reason="same_name_missing_address",
            )

    return NoMatch(reason="no_tier_matched")


def _names_related(left: str | None, right: str | None) -> bool:
    if left is None or right is None:
        return False
    return contains_words(left, right) or contains_words(right, left)


def _address_key(address: Address | None) -> str | None:
    if address is None:
        return None
    return address.key


def _same_locality(left: Address | None, right: Address | None) -> bool:
    """Postal codes decide when both sides carry one, otherwise city and region."""

    if left is None or right is None:
        return True
    if left.postal_code and right.postal_code:
        return left.postal_code[:5] == right.postal_code[:5]
    if left.city and right.city:
        if left.city.casefold() != right.city.casefold():
            return False
        if left.region and right.region:
            return left.region.casefold() == right.region.casefold()
    return True


def _ids(candidates: Sequence[StoredVenue]) -> tuple[UUID, ...]:
    return tuple(candidate.id for candidate in candidates)


def _dedupe(candidates: Sequence[StoredVenue]) -> list[StoredVenue]:
    seen: set[UUID] = set()
    deduped: list[StoredVenue] = []
    for candidate in candidates:
        if candidate.id in seen:
            continue
        seen.add(candidate.id)
        deduped.append(candidate)
    return deduped
