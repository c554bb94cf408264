from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx

from tests.helpers.venues import make_client_factory
from venuesync.adapters.nps import NpsAdapter, translate_park
from venuesync.config import NpsConfig
from venuesync.domain.model import Provider, SourceRef
from venuesync.domain.ports import ProviderQuery

if TYPE_CHECKING:
    from venuesync.domain.ports import RawItem


def _park(park_id: str = "77E0D7F0-1942-494A-ACE2-9004D2BDC59E") -> dict[str, object]:
    return {
        "id": park_id,
        "fullName": "Everglades National Park",
        "parkCode": "ever",
        "url": "https://www.nps.gov/ever/index.htm",
        "description": "The largest subtropical wilderness in the United States.",
        "designation": "National Park",
        "latitude": "25.37294225",
        "longitude": "-80.88200301",
        "addresses": [
            {
                "type": "Mailing",
                "line1": "40001 State Road 9336",
                "city": "Homestead",
                "stateCode": "FL",
                "postalCode": "33034",
            },
            {
                "type": "Physical",
                "line1": "40001 SR-9336",
                "city": "Homestead",
                "stateCode": "FL",
                "postalCode": "33034",
            },
        ],
        "contacts": {
            "phoneNumbers": [
                {"phoneNumber": "3052427701", "type": "Fax"},
                {"phoneNumber": "305-242-7700", "type": "Voice"},
            ]
        },
        "entranceFees": [
            {"cost": "35.00", "title": "Private Vehicle"},
            {"cost": "20.00", "title": "Per Person"},
        ],
        "activities": [{"name": "Hiking"}, {"name": "Boating"}],
        "images": [{"url": "https://www.nps.gov/common/uploads/ever.jpg"}],
    }


def test_translate_park_maps_fields() -> None:
    draft = translate_park(_park())

    assert draft.source == SourceRef(Provider.NPS, "77E0D7F0-1942-494A-ACE2-9004D2BDC59E")
    assert draft.name == "Everglades National Park"
    assert draft.source_categories == ("National Park",)
    assert draft.tags == frozenset({"Hiking", "Boating"})
    assert draft.raw_price == 20.0
    assert draft.phone == "305-242-7700"
    assert draft.image_url == "https://www.nps.gov/common/uploads/ever.jpg"
    assert draft.address is not None
    assert draft.address.street == "40001 SR-9336"
    assert draft.address.coordinates is not None


def test_translate_park_without_contacts_or_fees() -> None:
    payload = _park()
    payload.update(contacts=None, entranceFees=[], addresses=[], latitude="", longitude="")

    draft = translate_park(payload)

    assert draft.phone is None
    assert draft.raw_price is None
    assert draft.address is None


def test_fetch_batch_pages_with_start_and_limit() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        start = int(request.url.params["start"])
        data = [_park("p1"), _park("p2")] if start == 0 else [_park("p3")]
        return httpx.Response(
            200, json={"total": "3", "limit": "2", "start": str(start), "data": data}
        )

    adapter = NpsAdapter(NpsConfig(api_key="demo"), make_client_factory(handler))

    async def collect() -> list[RawItem]:
        return [item async for item in adapter.fetch_batch(ProviderQuery(page_size=2))]

    items = asyncio.run(collect())

    assert [item.payload["id"] for item in items] == ["p1", "p2", "p3"]
    assert [request.url.params["start"] for request in requests] == ["0", "2"]
    assert requests[0].headers["X-Api-Key"] == "demo"
    assert requests[0].url.params["stateCode"] == "FL"


def test_fetch_batch_is_lazy_and_restarts_from_first_page() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        start = int(request.url.params["start"])
        data = [_park("p1"), _park("p2")] if start == 0 else [_park("p3")]
        return httpx.Response(
            200, json={"total": "3", "limit": "2", "start": str(start), "data": data}
        )

    adapter = NpsAdapter(NpsConfig(api_key="demo"), make_client_factory(handler))

    async def take_first() -> RawItem:
        items = adapter.fetch_batch(ProviderQuery(page_size=2))
        first = await anext(items)
        await items.aclose()
        return first

    first = asyncio.run(take_first())
    assert len(requests) == 1

    again = asyncio.run(take_first())

    assert first.payload["id"] == again.payload["id"] == "p1"
    assert [request.url.params["start"] for request in requests] == ["0", "0"]
