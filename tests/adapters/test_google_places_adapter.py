from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from tests.helpers.venues import make_client_factory
from venuesync.adapters.google_places import GooglePlacesAdapter, translate_place
from venuesync.adapters.google_places.translator import price_label
from venuesync.config import (
    GooglePlacesConfig,
    MissingConfigurationError,
    get_google_places_config,
)
from venuesync.domain.errors import ProviderSchemaMismatchError, ProviderUnavailableError
from venuesync.domain.model import Coordinates, Provider, SourceRef
from venuesync.domain.ports import ProviderQuery

if TYPE_CHECKING:
    from collections.abc import Callable

    from venuesync.domain.ports import RawItem


def _place(place_id: str, name: str = "Joe's Pizza", **extra: object) -> dict[str, object]:
    place: dict[str, object] = {
        "place_id": place_id,
        "name": name,
        "formatted_address": "123 Collins Ave, Miami Beach, FL 33139, USA",
        "geometry": {"location": {"lat": 25.79, "lng": -80.13}},
        "types": ["pizza_restaurant", "restaurant", "food", "point_of_interest"],
        "price_level": 2,
        "rating": 4.4,
        "user_ratings_total": 1290,
        "business_status": "OPERATIONAL",
    }
    place.update(extra)
    return place


def _adapter(handler: Callable[[httpx.Request], httpx.Response]) -> GooglePlacesAdapter:
    config = GooglePlacesConfig(api_key="demo", page_token_delay_seconds=0.0)
    return GooglePlacesAdapter(config, make_client_factory(handler))


def _collect(adapter: GooglePlacesAdapter, query: ProviderQuery) -> list[RawItem]:
    async def collect() -> list[RawItem]:
        return [item async for item in adapter.fetch_batch(query)]

    return asyncio.run(collect())


def test_translate_place_maps_fields() -> None:
    draft = translate_place(_place("ChIJ-joes"))

    assert draft.source == SourceRef(Provider.GOOGLE_PLACES, "ChIJ-joes")
    assert draft.name == "Joe's Pizza"
    assert draft.source_categories == (
        "pizza_restaurant",
        "restaurant",
        "food",
        "point_of_interest",
    )
    assert draft.tags == frozenset({"Pizza"})
    assert draft.raw_price == "$$"
    assert draft.rating == 4.4
    assert draft.review_count == 1290
    assert draft.address is not None
    assert draft.address.street == "123 Collins Ave"
    assert draft.address.city == "Miami Beach"
    assert draft.address.region == "FL"
    assert draft.address.postal_code == "33139"
    assert draft.address.coordinates == Coordinates(25.79, -80.13)


def test_translate_place_without_address_keeps_coordinates() -> None:
    draft = translate_place(_place("ChIJ-park", "South Pointe Park", formatted_address=""))

    assert draft.address is not None
    assert draft.address.street is None
    assert draft.address.coordinates == Coordinates(25.79, -80.13)


@pytest.mark.parametrize(
    ("level", "label"), [(None, None), (0, "free"), (1, "$"), (4, "$$$$")]
)
def test_price_label(level: int | None, label: str | None) -> None:
    assert price_label(level) == label


def test_translate_place_rejects_malformed_payload() -> None:
    with pytest.raises(ProviderSchemaMismatchError) as excinfo:
        translate_place({"place_id": "ChIJ-broken", "types": "restaurant"})

    assert excinfo.value.native_id == "ChIJ-broken"
    assert excinfo.value.provider is Provider.GOOGLE_PLACES


def test_fetch_batch_follows_page_tokens() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if "pagetoken" in request.url.params:
            return httpx.Response(200, json={"status": "OK", "results": [_place("c")]})
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "results": [_place("a"), _place("b", "Sunset Cafe")],
                "next_page_token": "token-2",
            },
        )

    items = _collect(_adapter(handler), ProviderQuery(location="Miami Beach, FL", term="pizza"))

    assert [item.payload["place_id"] for item in items] == ["a", "b", "c"]
    assert len(requests) == 2
    first = requests[0]
    assert first.url.path == "/maps/api/place/textsearch/json"
    assert first.url.params["query"] == "pizza in Miami Beach, FL"
    assert first.url.params["key"] == "demo"
    assert dict(requests[1].url.params) == {"pagetoken": "token-2", "key": "demo"}


def test_fetch_batch_sends_coordinates_and_caps_items() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"status": "OK", "results": [_place("a"), _place("b")], "next_page_token": "t"},
        )

    query = ProviderQuery(
        location="Miami",
        latitude=25.79,
        longitude=-80.13,
        radius_meters=90000,
        categories=("museum",),
        max_items=2,
    )

    items = _collect(_adapter(handler), query)

    assert len(items) == 2
    assert len(seen) == 1
    params = seen[0].url.params
    assert params["query"] == "restaurants in Miami"
    assert params["location"] == "25.79,-80.13"
    assert params["radius"] == "50000"
    assert params["type"] == "museum"


def test_fetch_batch_skips_permanently_closed_places() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        closed = _place("gone", business_status="CLOSED_PERMANENTLY")
        return httpx.Response(200, json={"status": "OK", "results": [closed, _place("open")]})

    items = _collect(_adapter(handler), ProviderQuery(location="Miami"))

    assert [item.payload["place_id"] for item in items] == ["open"]


def test_fetch_batch_treats_zero_results_as_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

    assert _collect(_adapter(handler), ProviderQuery(location="Nowhere")) == []


def test_fetch_batch_raises_on_error_status_field() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(
            200,
            json={
                "status": "REQUEST_DENIED",
                "results": [],
                "error_message": "The provided API key is invalid.",
            },
        )

    with pytest.raises(ProviderUnavailableError) as excinfo:
        _collect(_adapter(handler), ProviderQuery(location="Miami"))

    assert excinfo.value.provider is Provider.GOOGLE_PLACES
    assert "REQUEST_DENIED" in str(excinfo.value)


def test_fetch_batch_raises_on_unexpected_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json={"businesses": []})

    with pytest.raises(ProviderSchemaMismatchError):
        _collect(_adapter(handler), ProviderQuery(location="Miami"))


def test_config_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOOGLE_PLACES_API_KEY", raising=False)

    with pytest.raises(MissingConfigurationError):
        get_google_places_config()


def test_fetch_batch_is_lazy_and_restarts_from_first_page() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={"status": "OK", "results": [_place("a"), _place("b")], "next_page_token": "t"},
        )

    adapter = _adapter(handler)
    query = ProviderQuery(location="Miami Beach, FL")

    async def take_first() -> RawItem:
        items = adapter.fetch_batch(query)
        first = await anext(items)
        await items.aclose()
        return first

    first = asyncio.run(take_first())
    assert len(requests) == 1

    again = asyncio.run(take_first())

    assert first.payload["place_id"] == again.payload["place_id"] == "a"
    assert ["pagetoken" in request.url.params for request in requests] == [False, False]
