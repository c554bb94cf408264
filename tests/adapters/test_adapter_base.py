from __future__ import annotations

import asyncio

import httpx
import pytest

from venuesync.adapters.base import get_json
from venuesync.adapters.http_resilience import ResilientClient
from venuesync.config import ResilienceConfig, RetryPolicy
from venuesync.domain.errors import ProviderSchemaMismatchError, ProviderUnavailableError
from venuesync.domain.model import Provider


def _get(
    transport: httpx.MockTransport, *, retry: RetryPolicy | None = None
) -> dict[str, object]:
    config = ResilienceConfig(
        name="test", base_url="https://api.example", retry=retry or RetryPolicy()
    )

    async def call() -> dict[str, object]:
        async with ResilientClient(config, transport=transport) as client:
            return await get_json(client, Provider.YELP, "/search", params={"q": "pizza"})

    return asyncio.run(call())


def test_get_json_returns_object_body() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))

    assert _get(transport) == {"ok": True}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json=[{"id": "a"}]),
    ],
)
def test_get_json_rejects_unexpected_bodies(response: httpx.Response) -> None:
    transport = httpx.MockTransport(lambda request: response)

    with pytest.raises(ProviderSchemaMismatchError):
        _get(transport)


def test_get_json_maps_error_status() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500))

    with pytest.raises(ProviderUnavailableError) as excinfo:
        _get(transport)

    assert excinfo.value.status_code == 500
    assert excinfo.value.provider is Provider.YELP


@pytest.mark.parametrize("status", [429, 503])
def test_failed_request_is_not_retried_within_a_run(status: int) -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        _ = request
        return httpx.Response(status) if calls == 1 else httpx.Response(200, json={})

    with pytest.raises(ProviderUnavailableError) as excinfo:
        _get(httpx.MockTransport(handler))

    assert excinfo.value.status_code == status
    assert calls == 1


def test_transport_failure_is_not_retried_within_a_run() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderUnavailableError):
        _get(httpx.MockTransport(handler))

    assert calls == 1


def test_retries_can_be_enabled_explicitly() -> None:
    calls = 0
    policy = RetryPolicy(
        total=1, backoff_factor=0.0, backoff_jitter=0.0, status_forcelist=frozenset({503})
    )

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        _ = request
        return httpx.Response(503) if calls == 1 else httpx.Response(200, json={"data": []})

    assert _get(httpx.MockTransport(handler), retry=policy) == {"data": []}
    assert calls == 2
