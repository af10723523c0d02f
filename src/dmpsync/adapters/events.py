"""Event publishers for the notification collaborator."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from dmpsync.adapters.http_resilience import ResilientClient
from dmpsync.adapters.retry import bounded_retry
from dmpsync.domain.errors import EventPublishError

if TYPE_CHECKING:
    from collections.abc import Callable

    from dmpsync.config.http_resilience import ResilienceConfig
    from dmpsync.domain.model import DomainEvent

log = logging.getLogger(__name__)

# Delivery failures; URL, stream and cache backend errors included.
_DELIVERY_ERRORS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    httpx.InvalidURL,
    httpx.StreamError,
    OSError,
    ValueError,
)


def event_payload(event: DomainEvent) -> dict[str, object]:
    return {
        "kind": event.kind.value,
        "dmp_id": event.dmp_id,
        "source": event.source,
        "detail": dict(event.detail),
        "occurred_at": event.occurred_at.isoformat(),
    }


class LoggingEventPublisher:
    """Publisher that only records events in the log (used by the CLI by default)."""

    def __init__(self) -> None:
        self.published: list[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self.published.append(event)
        log.info("Event %s for %s from %s", event.kind, event.dmp_id, event.source)


class HttpEventPublisher:
    """POST each event as JSON to a webhook.

    Transport-level retries come from ``ResilientClient``; a short bounded retry
    around the whole call covers failures that surface as HTTP status errors.
    """

    def __init__(
        self,
        *,
        config: ResilienceConfig,
        path: str = "events",
        attempts: int = 2,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._path = path
        self._client_factory = client_factory or ResilientClient
        self._send = bounded_retry(attempts=attempts, delay=1.0, retry_on=(httpx.HTTPError,))(
            self._send_once
        )

    def publish(self, event: DomainEvent) -> None:
        try:
            self._send(event)
        except _DELIVERY_ERRORS as exc:
            raise EventPublishError(f"Unable to publish {event.kind}: {exc}") from exc

    def _send_once(self, event: DomainEvent) -> None:
        asyncio.run(self._post(event))

    async def _post(self, event: DomainEvent) -> None:
        async with self._client_factory(self._config) as client:
            response = await client.post(self._path, json=event_payload(event))
            response.raise_for_status()
