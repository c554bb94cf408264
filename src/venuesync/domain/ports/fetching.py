"""Ports for fetching venue data from external providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Mapping

    from venuesync.domain.model import Provider, VenueDraft


@dataclass(slots=True, frozen=True, kw_only=True)
class ProviderQuery:
    """Search parameters shared by all providers; each uses what it understands."""

    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    radius_meters: int | None = None
    term: str | None = None
    categories: tuple[str, ...] = ()
    state_code: str | None = None
    page_size: int = 50
    max_items: int | None = None


@dataclass(slots=True, frozen=True)
class RawItem:
    """One provider record exactly as received, plus request context."""

    provider: Provider
    payload: Mapping[str, object]
    context: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class ProviderAdapter(Protocol):
    """One external source: its transport and its response schema."""

    @property
    def provider(self) -> Provider: ...

    def fetch_batch(self, query: ProviderQuery) -> AsyncGenerator[RawItem]:
        """Lazily page through the provider; every call starts from the first page."""
        ...

    def translate(self, item: RawItem) -> VenueDraft:
        """Map one raw item to a draft, raising ``ProviderSchemaMismatchError``."""
        ...


__all__ = ["ProviderAdapter", "ProviderQuery", "RawItem"]
