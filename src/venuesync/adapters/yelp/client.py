"""Yelp Fusion business search adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from venuesync.adapters.base import default_client_factory, get_json, parse_envelope
from venuesync.domain.model import Provider
from venuesync.domain.ports.fetching import RawItem

from .schema import YelpSearchResponse
from .translator import translate_business

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from venuesync.adapters.base import ClientFactory
    from venuesync.config.providers import YelpConfig
    from venuesync.domain.model import VenueDraft
    from venuesync.domain.ports.fetching import ProviderQuery

log = getLogger(__name__)

SEARCH_PATH = "/businesses/search"
MAX_PAGE_SIZE = 50
# Yelp refuses offset + limit beyond this
MAX_RESULTS = 1000
MAX_RADIUS_METERS = 40000


@dataclass(slots=True)
class YelpAdapter:
    config: YelpConfig
    client_factory: ClientFactory = field(default=default_client_factory)

    @property
    def provider(self) -> Provider:
        return Provider.YELP

    async def fetch_batch(self, query: ProviderQuery) -> AsyncGenerator[RawItem]:
        limit = max(1, min(query.page_size, MAX_PAGE_SIZE))
        ceiling = MAX_RESULTS if query.max_items is None else min(query.max_items, MAX_RESULTS)
        headers = {"Authorization": f"Bearer {self.config.api_key}", "Accept": "application/json"}
        offset = 0
        async with self.client_factory(self.config.resilience) as client:
            while offset < ceiling:
                params = self._params(query, offset=offset, limit=min(limit, ceiling - offset))
                payload = await get_json(
                    client, Provider.YELP, SEARCH_PATH, params=params, headers=headers
                )
                page = parse_envelope(YelpSearchResponse, payload, Provider.YELP)
                log.debug("Yelp offset=%d returned %d businesses", offset, len(page.businesses))
                for business in page.businesses:
                    yield RawItem(Provider.YELP, business)
                offset += len(page.businesses)
                if not page.businesses or offset >= page.total:
                    break

    def translate(self, item: RawItem) -> VenueDraft:
        return translate_business(item.payload)

    def _params(self, query: ProviderQuery, *, offset: int, limit: int) -> dict[str, str | int]:
        params: dict[str, str | int] = {"offset": offset, "limit": limit}
        if query.latitude is not None and query.longitude is not None:
            params["latitude"] = query.latitude
            params["longitude"] = query.longitude
        elif query.location:
            params["location"] = query.location
        if query.term:
            params["term"] = query.term
        if query.categories:
            params["categories"] = ",".join(query.categories)
        if query.radius_meters is not None:
            params["radius"] = min(query.radius_meters, MAX_RADIUS_METERS)
        return params
