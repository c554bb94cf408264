"""Miami Beach business registry adapter.

The registry is public and unauthenticated. It reports no totals, so paging
stops at the first empty page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from venuesync.adapters.base import default_client_factory, get_json, parse_envelope
from venuesync.domain.model import Provider
from venuesync.domain.ports.fetching import RawItem

from .schema import BusinessSearchResponse
from .translator import translate_business

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Mapping

    from venuesync.adapters.base import ClientFactory
    from venuesync.config.providers import MiamiBeachConfig
    from venuesync.domain.model import VenueDraft
    from venuesync.domain.ports.fetching import ProviderQuery

log = getLogger(__name__)

SEARCH_PATH = "/businesses/search"
MAX_PAGES = 500


@dataclass(slots=True)
class MiamiBeachAdapter:
    config: MiamiBeachConfig
    client_factory: ClientFactory = field(default=default_client_factory)

    @property
    def provider(self) -> Provider:
        return Provider.MIAMI_BEACH

    async def fetch_batch(self, query: ProviderQuery) -> AsyncGenerator[RawItem]:
        limit = max(1, query.page_size)
        yielded = 0
        async with self.client_factory(self.config.resilience) as client:
            for page_number in range(1, MAX_PAGES + 1):
                params: dict[str, str | int] = {"page": page_number, "limit": limit}
                if self.config.category_filter:
                    params["category_filter"] = self.config.category_filter
                if query.term:
                    params["keyword"] = query.term
                payload = await get_json(client, Provider.MIAMI_BEACH, SEARCH_PATH, params=params)
                page = parse_envelope(BusinessSearchResponse, payload, Provider.MIAMI_BEACH)
                log.debug(
                    "Miami Beach page %d returned %d businesses", page_number, len(page.businesses)
                )
                if not page.businesses:
                    break
                for business in page.businesses:
                    if self._excluded(business):
                        log.debug("Skipping excluded business %s", business.get("bus_name"))
                        continue
                    if query.max_items is not None and yielded >= query.max_items:
                        return
                    yield RawItem(Provider.MIAMI_BEACH, business)
                    yielded += 1

    def translate(self, item: RawItem) -> VenueDraft:
        return translate_business(item.payload)

    def _excluded(self, business: Mapping[str, object]) -> bool:
        name = business.get("bus_name") or business.get("name")
        if not isinstance(name, str):
            return False
        folded = name.casefold()
        return any(term in folded for term in self.config.excluded_name_terms)
