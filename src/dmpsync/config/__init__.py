"""Application configuration helpers."""

from __future__ import annotations

from .datacite import DataCiteConfig, get_datacite_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .events import EventsConfig, get_events_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config, parse_confidence_bands

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DataCiteConfig",
    "DatabaseConfig",
    "EventsConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "get_database_config",
    "get_datacite_config",
    "get_events_config",
    "get_storage_config",
    "get_sync_config",
    "parse_confidence_bands",
    "require_env_var",
    "require_env_vars",
]
