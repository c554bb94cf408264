"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from venuesync.adapters.base import default_client_factory
from venuesync.adapters.google_places import GooglePlacesAdapter
from venuesync.adapters.miami_beach import MiamiBeachAdapter
from venuesync.adapters.nps import NpsAdapter
from venuesync.adapters.sqlalchemy import SqlAlchemyVenueStore, is_started, startup
from venuesync.adapters.ticketmaster import TicketmasterAdapter
from venuesync.adapters.yelp import YelpAdapter
from venuesync.config import (
    get_google_places_config,
    get_import_config,
    get_miami_beach_config,
    get_nps_config,
    get_ticketmaster_config,
    get_yelp_config,
)
from venuesync.domain.ingest import ImportCoordinator
from venuesync.domain.model import Provider

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from venuesync.adapters.base import ClientFactory
    from venuesync.config import ImportConfig
    from venuesync.domain.ingest import RunSummary
    from venuesync.domain.ports import ProviderAdapter, ProviderQuery, VenueStore

log = getLogger(__name__)


def build_adapter(
    provider: Provider,
    *,
    client_factory: ClientFactory = default_client_factory,
) -> ProviderAdapter:
    """Build the adapter for ``provider`` from environment configuration."""

    if provider is Provider.YELP:
        return YelpAdapter(get_yelp_config(), client_factory)
    if provider is Provider.TICKETMASTER:
        return TicketmasterAdapter(get_ticketmaster_config(), client_factory)
    if provider is Provider.NPS:
        return NpsAdapter(get_nps_config(), client_factory)
    if provider is Provider.MIAMI_BEACH:
        return MiamiBeachAdapter(get_miami_beach_config(), client_factory)
    if provider is Provider.GOOGLE_PLACES:
        return GooglePlacesAdapter(get_google_places_config(), client_factory)
    raise ValueError(f"Unsupported provider: {provider}")


def build_adapters(
    providers: Iterable[Provider],
    *,
    client_factory: ClientFactory = default_client_factory,
) -> list[ProviderAdapter]:
    unique = dict.fromkeys(providers)
    return [build_adapter(provider, client_factory=client_factory) for provider in unique]


def import_venues(
    query: ProviderQuery,
    *,
    providers: Iterable[Provider] | None = None,
    adapters: Sequence[ProviderAdapter] | None = None,
    store: VenueStore | None = None,
    config: ImportConfig | None = None,
) -> RunSummary:
    """Import venues from the configured providers into the configured store."""

    effective_adapters = (
        list(adapters) if adapters is not None else build_adapters(providers or Provider)
    )
    if store is None:
        if not is_started():
            startup()
        store = SqlAlchemyVenueStore()
    effective_config = config or get_import_config()
    log.info(
        "Starting venue import: providers=%s, location=%s, term=%s, max_items=%s",
        ",".join(str(adapter.provider) for adapter in effective_adapters),
        query.location
        or (f"{query.latitude},{query.longitude}" if query.latitude is not None else None),
        query.term,
        query.max_items,
    )

    coordinator = ImportCoordinator(
        adapters=effective_adapters,
        store=store,
        config=effective_config,
    )
    return asyncio.run(coordinator.run(query))
