"""Helpers shared by the provider adapters."""

from __future__ import annotations

import hashlib
import re
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from venuesync.domain.errors import ProviderSchemaMismatchError, ProviderUnavailableError
from venuesync.domain.model import Address
from venuesync.domain.normalization import address_key, name_key

from .http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from httpx._types import HeaderTypes, QueryParamTypes
    from pydantic import BaseModel

    from venuesync.config.http_resilience import ResilienceConfig
    from venuesync.domain.model import Provider

log = getLogger(__name__)

type ClientFactory = Callable[[ResilienceConfig], ResilientClient]

_REGION_POSTAL = re.compile(r"^(?P<region>[A-Za-z]{2})\s+(?P<postal>\d{5}(?:-\d{4})?)$")


def default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


async def get_json(
    client: ResilientClient,
    provider: Provider,
    path: str,
    *,
    params: QueryParamTypes | None = None,
    headers: HeaderTypes | None = None,
) -> dict[str, object]:
    """GET ``path`` and return its JSON object body.

    Transport failures and error statuses raise ``ProviderUnavailableError``;
    a body that is not a JSON object raises ``ProviderSchemaMismatchError``.
    """

    try:
        response = await client.get(path, params=params, headers=headers)
    except httpx.TimeoutException as exc:
        raise ProviderUnavailableError(provider, f"timeout requesting {path}") from exc
    except httpx.HTTPError as exc:
        raise ProviderUnavailableError(provider, f"request to {path} failed: {exc}") from exc

    if not response.is_success:
        log.debug("%s responded %s for %s", provider, response.status_code, path)
        raise ProviderUnavailableError(
            provider,
            f"HTTP {response.status_code} from {path}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise ProviderSchemaMismatchError(provider, f"non-JSON response from {path}") from exc
    if not isinstance(payload, dict):
        raise ProviderSchemaMismatchError(provider, f"expected a JSON object from {path}")
    return payload


def parse_envelope[TModel: BaseModel](
    model: type[TModel],
    payload: Mapping[str, object],
    provider: Provider,
) -> TModel:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ProviderSchemaMismatchError(
            provider,
            f"unexpected {model.__name__} envelope: {exc.error_count()} errors",
        ) from exc


def parse_item[TModel: BaseModel](
    model: type[TModel],
    payload: Mapping[str, object],
    provider: Provider,
) -> TModel:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        native_id = payload.get("id")
        raise ProviderSchemaMismatchError(
            provider,
            f"malformed {model.__name__}: {exc.errors()[0]['msg']}",
            native_id=str(native_id) if native_id is not None else None,
        ) from exc


def synthesize_native_id(name: str | None, street: str | None) -> str | None:
    """Deterministic id for providers without one; ``None`` when nothing identifies the item."""

    name_part = name_key(name) or ""
    address_part = address_key(street) or ""
    if not name_part and not address_part:
        return None
    digest = hashlib.sha1(f"{name_part}|{address_part}".encode(), usedforsecurity=False)
    return digest.hexdigest()


def split_full_address(value: str | None) -> Address | None:
    """Split ``"1234 Collins Ave, Miami Beach, FL 33140"`` into its parts.

    A trailing country part is ignored.
    """

    if value is None:
        return None
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if not parts:
        return None
    street = parts[0]
    city = parts[1] if len(parts) > 1 else None
    region = postal_code = None
    if len(parts) > 2:
        match = _REGION_POSTAL.match(parts[2])
        if match:
            region = match.group("region").upper()
            postal_code = match.group("postal")
        else:
            region = parts[2]
    return Address(street=street, city=city, region=region, postal_code=postal_code)
