"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ingest import ImportConfig, NeighborhoodBounds, get_import_config
from .logging import configure_logging
from .providers import (
    GooglePlacesConfig,
    MiamiBeachConfig,
    NpsConfig,
    TicketmasterConfig,
    YelpConfig,
    get_google_places_config,
    get_miami_beach_config,
    get_nps_config,
    get_ticketmaster_config,
    get_yelp_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "GooglePlacesConfig",
    "ImportConfig",
    "MiamiBeachConfig",
    "MissingConfigurationError",
    "NeighborhoodBounds",
    "NpsConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "TicketmasterConfig",
    "YelpConfig",
    "configure_logging",
    "get_database_config",
    "get_google_places_config",
    "get_import_config",
    "get_miami_beach_config",
    "get_nps_config",
    "get_storage_config",
    "get_ticketmaster_config",
    "get_yelp_config",
    "require_env_var",
    "require_env_vars",
]
