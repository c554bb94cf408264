"""Provider endpoints, credentials and HTTP resilience defaults."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

YELP_BASE_URL = "https://api.yelp.com/v3"
TICKETMASTER_BASE_URL = "https://app.ticketmaster.com/discovery/v2"
NPS_BASE_URL = "https://developer.nps.gov/api/v1"
MIAMI_BEACH_BASE_URL = "https://www.miamibeachapi.com/rest/a.pi"
GOOGLE_PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"

PROVIDER_TIMEOUT_SECONDS = 15.0
REGISTRY_CACHE_TTL_SECONDS = 24 * 60 * 60.0


def _has_records(payload: object) -> bool:
    """Cache only pages that carry records so an outage page is not replayed."""

    if not isinstance(payload, dict):
        return False
    return bool(payload.get("data") or payload.get("businesses"))


def _yelp_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="yelp",
        base_url=YELP_BASE_URL,
        timeout_seconds=PROVIDER_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )


def _ticketmaster_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="ticketmaster",
        base_url=TICKETMASTER_BASE_URL,
        timeout_seconds=PROVIDER_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
    )


def _nps_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="nps",
        base_url=NPS_BASE_URL,
        timeout_seconds=PROVIDER_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=CacheConfig(
            default_ttl_seconds=REGISTRY_CACHE_TTL_SECONDS, should_cache=_has_records
        ),
    )


def _miami_beach_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="miami_beach",
        base_url=MIAMI_BEACH_BASE_URL,
        timeout_seconds=PROVIDER_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=CacheConfig(
            default_ttl_seconds=REGISTRY_CACHE_TTL_SECONDS, should_cache=_has_records
        ),
        default_headers={"User-Agent": "venuesync/1.0 (+registry import)"},
    )


def _google_places_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="google_places",
        base_url=GOOGLE_PLACES_BASE_URL,
        timeout_seconds=PROVIDER_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
    )


@dataclass(frozen=True)
class YelpConfig:
    api_key: str
    resilience: ResilienceConfig = field(default_factory=_yelp_resilience)


@dataclass(frozen=True)
class TicketmasterConfig:
    api_key: str
    resilience: ResilienceConfig = field(default_factory=_ticketmaster_resilience)


@dataclass(frozen=True)
class NpsConfig:
    api_key: str
    resilience: ResilienceConfig = field(default_factory=_nps_resilience)


@dataclass(frozen=True)
class MiamiBeachConfig:
    """The municipal registry is public; only filtering is configurable.

    ``excluded_name_terms`` drops grocery stores the restaurant category also lists.
    """

    category_filter: str | None = "361"
    excluded_name_terms: tuple[str, ...] = (
        "market",
        "grocery",
        "publix",
        "whole foods",
        "food store",
    )
    resilience: ResilienceConfig = field(default_factory=_miami_beach_resilience)


@dataclass(frozen=True)
class GooglePlacesConfig:
    """Text Search settings.

    A ``next_page_token`` only becomes valid a short while after it is issued,
    so the adapter waits ``page_token_delay_seconds`` before asking for it.
    """

    api_key: str
    page_token_delay_seconds: float = 2.0
    resilience: ResilienceConfig = field(default_factory=_google_places_resilience)


def get_yelp_config(*, resilience: ResilienceConfig | None = None) -> YelpConfig:
    values = require_env_vars(("YELP_API_KEY",))
    return YelpConfig(
        api_key=values["YELP_API_KEY"],
        resilience=resilience or _yelp_resilience(),
    )


def get_ticketmaster_config(*, resilience: ResilienceConfig | None = None) -> TicketmasterConfig:
    values = require_env_vars(("TICKETMASTER_API_KEY",))
    return TicketmasterConfig(
        api_key=values["TICKETMASTER_API_KEY"],
        resilience=resilience or _ticketmaster_resilience(),
    )


def get_nps_config(*, resilience: ResilienceConfig | None = None) -> NpsConfig:
    values = require_env_vars(("NPS_API_KEY",))
    return NpsConfig(api_key=values["NPS_API_KEY"], resilience=resilience or _nps_resilience())


def get_miami_beach_config(*, resilience: ResilienceConfig | None = None) -> MiamiBeachConfig:
    return MiamiBeachConfig(resilience=resilience or _miami_beach_resilience())


def get_google_places_config(*, resilience: ResilienceConfig | None = None) -> GooglePlacesConfig:
    values = require_env_vars(("GOOGLE_PLACES_API_KEY",))
    return GooglePlacesConfig(
        api_key=values["GOOGLE_PLACES_API_KEY"],
        resilience=resilience or _google_places_resilience(),
    )
