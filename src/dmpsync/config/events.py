"""Notification webhook configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import env_float
from .http_resilience import CacheConfig, ResilienceConfig, RetryPolicy


@dataclass(frozen=True, slots=True)
class EventsConfig:
    resilience: ResilienceConfig
    path: str = "events"


def get_events_config() -> EventsConfig | None:
    """Return the webhook configuration, or ``None`` when events are only logged."""

    base_url = os.getenv("DMPSYNC_EVENTS_URL")
    if not base_url or not base_url.strip():
        return None
    resilience = ResilienceConfig(
        name="events",
        base_url=base_url.strip(),
        timeout_seconds=env_float("DMPSYNC_EVENTS_TIMEOUT_SECONDS", 10.0),
        retry=RetryPolicy(total=2),
        cache=CacheConfig(enabled=False),
        default_headers={"Content-Type": "application/json"},
    )
    return EventsConfig(resilience=resilience, path=os.getenv("DMPSYNC_EVENTS_PATH") or "events")
