"""Ticketmaster Discovery API adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from venuesync.adapters.base import default_client_factory, get_json, parse_envelope
from venuesync.domain.model import Provider
from venuesync.domain.ports.fetching import RawItem

from .schema import EventSearchResponse
from .translator import translate_event

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from venuesync.adapters.base import ClientFactory
    from venuesync.config.providers import TicketmasterConfig
    from venuesync.domain.model import VenueDraft
    from venuesync.domain.ports.fetching import ProviderQuery

log = getLogger(__name__)

EVENTS_PATH = "/events.json"
MAX_PAGE_SIZE = 200
# Discovery API rejects page * size beyond this
MAX_RESULTS = 1000


@dataclass(slots=True)
class TicketmasterAdapter:
    config: TicketmasterConfig
    client_factory: ClientFactory = field(default=default_client_factory)

    @property
    def provider(self) -> Provider:
        return Provider.TICKETMASTER

    async def fetch_batch(self, query: ProviderQuery) -> AsyncGenerator[RawItem]:
        size = max(1, min(query.page_size, MAX_PAGE_SIZE))
        ceiling = MAX_RESULTS if query.max_items is None else min(query.max_items, MAX_RESULTS)
        page_number = 0
        yielded = 0
        async with self.client_factory(self.config.resilience) as client:
            while yielded < ceiling and (page_number + 1) * size <= MAX_RESULTS:
                payload = await get_json(
                    client,
                    Provider.TICKETMASTER,
                    EVENTS_PATH,
                    params=self._params(query, page=page_number, size=size),
                )
                page = parse_envelope(EventSearchResponse, payload, Provider.TICKETMASTER)
                log.debug(
                    "Ticketmaster page %d/%d returned %d events",
                    page.page.number + 1,
                    page.page.total_pages,
                    len(page.events),
                )
                for event in page.events:
                    if yielded >= ceiling:
                        return
                    yield RawItem(Provider.TICKETMASTER, event)
                    yielded += 1
                page_number += 1
                if not page.events or page_number >= page.page.total_pages:
                    break

    def translate(self, item: RawItem) -> VenueDraft:
        return translate_event(item.payload)

    def _params(self, query: ProviderQuery, *, page: int, size: int) -> dict[str, str | int]:
        params: dict[str, str | int] = {
            "apikey": self.config.api_key,
            "page": page,
            "size": size,
        }
        if query.latitude is not None and query.longitude is not None:
            params["latlong"] = f"{query.latitude},{query.longitude}"
            if query.radius_meters is not None:
                params["radius"] = max(1, round(query.radius_meters / 1000))
                params["unit"] = "km"
        elif query.location:
            params["city"] = query.location.split(",", 1)[0].strip()
        if query.state_code:
            params["stateCode"] = query.state_code
        if query.term:
            params["keyword"] = query.term
        if query.categories:
            params["classificationName"] = ",".join(query.categories)
        return params
