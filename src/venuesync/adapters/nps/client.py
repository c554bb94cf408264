"""National Park Service data API adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from venuesync.adapters.base import default_client_factory, get_json, parse_envelope
from venuesync.domain.model import Provider
from venuesync.domain.ports.fetching import RawItem

from .schema import ParksResponse
from .translator import translate_park

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from venuesync.adapters.base import ClientFactory
    from venuesync.config.providers import NpsConfig
    from venuesync.domain.model import VenueDraft
    from venuesync.domain.ports.fetching import ProviderQuery

log = getLogger(__name__)

PARKS_PATH = "/parks"
DEFAULT_STATE_CODE = "FL"


@dataclass(slots=True)
class NpsAdapter:
    config: NpsConfig
    client_factory: ClientFactory = field(default=default_client_factory)

    @property
    def provider(self) -> Provider:
        return Provider.NPS

    async def fetch_batch(self, query: ProviderQuery) -> AsyncGenerator[RawItem]:
        limit = max(1, query.page_size)
        headers = {"X-Api-Key": self.config.api_key}
        start = 0
        yielded = 0
        async with self.client_factory(self.config.resilience) as client:
            while query.max_items is None or yielded < query.max_items:
                params: dict[str, str | int] = {
                    "stateCode": query.state_code or DEFAULT_STATE_CODE,
                    "start": start,
                    "limit": limit,
                }
                if query.term:
                    params["q"] = query.term
                payload = await get_json(
                    client, Provider.NPS, PARKS_PATH, params=params, headers=headers
                )
                page = parse_envelope(ParksResponse, payload, Provider.NPS)
                log.debug(
                    "NPS start=%d returned %d of %d parks", start, len(page.data), page.total
                )
                for park in page.data:
                    if query.max_items is not None and yielded >= query.max_items:
                        return
                    yield RawItem(Provider.NPS, park)
                    yielded += 1
                start += len(page.data)
                if not page.data or start >= page.total:
                    break

    def translate(self, item: RawItem) -> VenueDraft:
        return translate_park(item.payload)
