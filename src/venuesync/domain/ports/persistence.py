"""Ports for persisting canonical venues."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from venuesync.domain.model import Category, FieldPatch, NewVenue, SourceRef, StoredVenue


@dataclass(slots=True, frozen=True, kw_only=True)
class CandidateFilter:
    """Predicates combined with AND; ``None`` leaves a predicate out.

    ``postal_code`` and ``city`` form one locality predicate: a venue passes
    when either one matches, or when it records neither.
    """

    category: Category | None = None
    neighborhoods: frozenset[str] | None = None
    address_contains: str | None = None
    postal_code: str | None = None
    city: str | None = None
    source: SourceRef | None = None
    limit: int | None = None


@runtime_checkable
class VenueStore(Protocol):
    """Contract a storage backend satisfies to receive normalized venues."""

    def query(self, candidate_filter: CandidateFilter) -> Sequence[StoredVenue]: ...

    def insert(self, venue: NewVenue) -> UUID: ...

    def update(self, venue_id: UUID, patch: FieldPatch) -> None: ...
