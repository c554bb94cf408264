"""Canonical venue records.

A ``VenueDraft`` is what adapters and the normalizer produce for a single
provider item. ``StoredVenue`` is the snapshot the store hands back for
matching, ``NewVenue`` and ``FieldPatch`` are what the coordinator writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from venuesync.domain.model.enums import Category, RecordStatus, ReviewFlag, VenueField

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from venuesync.domain.model.enums import Provider

MIN_PRICE_TIER = 1
MAX_PRICE_TIER = 5


def price_display(tier: int | None) -> str | None:
    """Render a price tier as ``$``..``$$$$$``."""

    if tier is None or not MIN_PRICE_TIER <= tier <= MAX_PRICE_TIER:
        return None
    return "$" * tier


@dataclass(slots=True, frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True, kw_only=True)
class Address:
    """Street address as displayed plus the key used for comparison."""

    street: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    neighborhood: str | None = None
    coordinates: Coordinates | None = None
    key: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.street and not self.key

    @property
    def display(self) -> str | None:
        locality = " ".join(part for part in (self.region, self.postal_code) if part)
        parts = [part for part in (self.street, self.city, locality) if part]
        return ", ".join(parts) or None


@dataclass(slots=True, frozen=True)
class SourceRef:
    """Provider-native identity of an imported item."""

    provider: Provider
    native_id: str

    def __str__(self) -> str:
        return f"{self.provider}:{self.native_id}"


@dataclass(slots=True, frozen=True, kw_only=True)
class VenueDraft:
    """Canonical record candidate for one provider item."""

    source: SourceRef
    name: str | None = None
    category: Category | None = None
    source_categories: tuple[str, ...] = ()
    tags: frozenset[str] = frozenset()
    raw_price: str | int | float | None = None
    price_tier: int | None = None
    address: Address | None = None
    phone: str | None = None
    website: str | None = None
    description: str | None = None
    image_url: str | None = None
    rating: float | None = None
    review_count: int | None = None
    review_flags: frozenset[ReviewFlag] = frozenset()

    @property
    def provider(self) -> Provider:
        return self.source.provider

    @property
    def price_display(self) -> str | None:
        return price_display(self.price_tier)

    @property
    def needs_review(self) -> bool:
        return bool(self.review_flags)

    def value_of(self, venue_field: VenueField) -> object:
        return getattr(self, venue_field.value)


@dataclass(slots=True, frozen=True, kw_only=True)
class StoredVenue:
    """Snapshot of a persisted venue row."""

    id: UUID
    name: str | None
    category: Category
    status: RecordStatus
    tags: frozenset[str] = frozenset()
    price_tier: int | None = None
    address: Address | None = None
    phone: str | None = None
    website: str | None = None
    description: str | None = None
    image_url: str | None = None
    rating: float | None = None
    review_count: int | None = None
    review_flags: frozenset[ReviewFlag] = frozenset()
    sources: tuple[SourceRef, ...] = ()
    field_sources: Mapping[VenueField, Provider] = field(default_factory=dict)

    @property
    def price_display(self) -> str | None:
        return price_display(self.price_tier)

    @property
    def is_manual(self) -> bool:
        return not self.sources

    def value_of(self, venue_field: VenueField) -> object:
        return getattr(self, venue_field.value)

    def source_of(self, venue_field: VenueField) -> Provider | None:
        return self.field_sources.get(venue_field)


@dataclass(slots=True, frozen=True, kw_only=True)
class NewVenue:
    """Row to insert for a draft that matched nothing."""

    name: str | None
    category: Category
    status: RecordStatus
    tags: frozenset[str] = frozenset()
    price_tier: int | None = None
    address: Address | None = None
    phone: str | None = None
    website: str | None = None
    description: str | None = None
    image_url: str | None = None
    rating: float | None = None
    review_count: int | None = None
    review_flags: frozenset[ReviewFlag] = frozenset()
    source: SourceRef | None = None
    field_sources: Mapping[VenueField, Provider] = field(default_factory=dict)

    @classmethod
    def from_draft(cls, draft: VenueDraft, *, status: RecordStatus) -> NewVenue:
        field_sources = {
            venue_field: draft.provider
            for venue_field in VenueField
            if not is_blank(draft.value_of(venue_field))
        }
        return cls(
            name=draft.name,
            category=draft.category or Category.UNCATEGORIZED,
            status=status,
            tags=draft.tags,
            price_tier=draft.price_tier,
            address=draft.address,
            phone=draft.phone,
            website=draft.website,
            description=draft.description,
            image_url=draft.image_url,
            rating=draft.rating,
            review_count=draft.review_count,
            review_flags=draft.review_flags,
            source=draft.source,
            field_sources=field_sources,
        )


@dataclass(slots=True, frozen=True, kw_only=True)
class FieldPatch:
    """Partial update of a stored venue with per-field provenance."""

    values: Mapping[VenueField, object] = field(default_factory=dict)
    field_sources: Mapping[VenueField, Provider] = field(default_factory=dict)
    tags: frozenset[str] | None = None
    category: Category | None = None
    review_flags: frozenset[ReviewFlag] | None = None
    status: RecordStatus | None = None
    add_source: SourceRef | None = None

    @property
    def is_empty(self) -> bool:
        return not self.changes_fields and self.add_source is None

    @property
    def changes_fields(self) -> bool:
        return (
            bool(self.values)
            or self.tags is not None
            or self.category is not None
            or self.review_flags is not None
            or self.status is not None
        )


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, Address):
        return value.is_empty
    if isinstance(value, str):
        return not value.strip()
    return False
