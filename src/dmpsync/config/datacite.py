"""DataCite GraphQL configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import env_float
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_DATACITE_GRAPHQL_URL = "https://api.datacite.org/graphql"
DEFAULT_DATACITE_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "dmpsync (related-works harvester)"


@dataclass(frozen=True, slots=True)
class DataCiteConfig:
    resilience: ResilienceConfig
    provenance_id: str = "datacite"

    @property
    def endpoint(self) -> str:
        return self.resilience.base_url or DEFAULT_DATACITE_GRAPHQL_URL


def get_datacite_config() -> DataCiteConfig:
    endpoint = os.getenv("DATACITE_GRAPHQL_URL") or DEFAULT_DATACITE_GRAPHQL_URL
    timeout = env_float("DATACITE_TIMEOUT_SECONDS", DEFAULT_DATACITE_TIMEOUT_SECONDS)
    user_agent = os.getenv("DATACITE_USER_AGENT") or DEFAULT_USER_AGENT

    resilience = ResilienceConfig(
        name="datacite",
        base_url=endpoint,
        timeout_seconds=timeout,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        cache=CacheConfig(enabled=True, backend="sqlite", default_ttl_seconds=86400.0),
        default_headers={"User-Agent": user_agent, "Content-Type": "application/json"},
    )
    return DataCiteConfig(
        resilience=resilience,
        provenance_id=os.getenv("DATACITE_PROVENANCE_ID") or "datacite",
    )
