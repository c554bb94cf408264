"""Google Places Text Search adapter."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from venuesync.adapters.base import default_client_factory, get_json, parse_envelope
from venuesync.domain.errors import ProviderUnavailableError
from venuesync.domain.model import Provider
from venuesync.domain.ports.fetching import RawItem

from .schema import TextSearchResponse
from .translator import translate_place

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from venuesync.adapters.base import ClientFactory
    from venuesync.config.providers import GooglePlacesConfig
    from venuesync.domain.model import VenueDraft
    from venuesync.domain.ports.fetching import ProviderQuery

log = getLogger(__name__)

SEARCH_PATH = "/textsearch/json"
# Text Search hands out at most three pages of twenty
MAX_PAGES = 3
MAX_RADIUS_METERS = 50000
DEFAULT_TERM = "restaurants"
CLOSED_STATUS = "CLOSED_PERMANENTLY"
_OK_STATUSES = frozenset({"OK", "ZERO_RESULTS"})


@dataclass(slots=True)
class GooglePlacesAdapter:
    config: GooglePlacesConfig
    client_factory: ClientFactory = field(default=default_client_factory)

    @property
    def provider(self) -> Provider:
        return Provider.GOOGLE_PLACES

    async def fetch_batch(self, query: ProviderQuery) -> AsyncGenerator[RawItem]:
        remaining = query.max_items
        params = self._params(query)
        async with self.client_factory(self.config.resilience) as client:
            for page_number in range(MAX_PAGES):
                payload = await get_json(
                    client, Provider.GOOGLE_PLACES, SEARCH_PATH, params=params
                )
                page = parse_envelope(TextSearchResponse, payload, Provider.GOOGLE_PLACES)
                if page.status not in _OK_STATUSES:
                    detail = f": {page.error_message}" if page.error_message else ""
                    raise ProviderUnavailableError(
                        Provider.GOOGLE_PLACES, f"Text Search status {page.status}{detail}"
                    )
                log.debug("Google page=%d returned %d places", page_number, len(page.results))
                for place in page.results:
                    if remaining is not None and remaining <= 0:
                        return
                    if place.get("business_status") == CLOSED_STATUS:
                        log.debug("Skipping closed place %s", place.get("place_id"))
                        continue
                    yield RawItem(Provider.GOOGLE_PLACES, place)
                    if remaining is not None:
                        remaining -= 1
                if not page.next_page_token or (remaining is not None and remaining <= 0):
                    break
                await asyncio.sleep(self.config.page_token_delay_seconds)
                params = {"pagetoken": page.next_page_token, "key": self.config.api_key}

    def translate(self, item: RawItem) -> VenueDraft:
        return translate_place(item.payload)

    def _params(self, query: ProviderQuery) -> dict[str, str | int]:
        term = query.term or DEFAULT_TERM
        search = f"{term} in {query.location}" if query.location else term
        params: dict[str, str | int] = {"query": search, "key": self.config.api_key}
        if query.latitude is not None and query.longitude is not None:
            params["location"] = f"{query.latitude},{query.longitude}"
            if query.radius_meters is not None:
                params["radius"] = min(query.radius_meters, MAX_RADIUS_METERS)
        if query.categories:
            params["type"] = query.categories[0]
        return params
