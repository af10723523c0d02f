from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import httpx
import pytest

from dmpsync.adapters.events import HttpEventPublisher, LoggingEventPublisher, event_payload
from dmpsync.adapters.http_resilience import ResilientClient
from dmpsync.config.http_resilience import ResilienceConfig, RetryPolicy
from dmpsync.domain.errors import EventPublishError
from dmpsync.domain.model import DomainEvent, EventKind

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://hooks.example.test/"


def _event() -> DomainEvent:
    return DomainEvent(
        kind=EventKind.CITATION_FETCH,
        dmp_id="https://doi.org/10.48321/D1ABCD",
        source="dmptool",
        detail={"identifiers": ["https://doi.org/10.1/a"]},
        occurred_at=datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
    )


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=BASE_URL, transport=httpx.MockTransport(async_handler)
        )
        return client

    return factory


def _config() -> ResilienceConfig:
    return ResilienceConfig(
        name="events-test", base_url=BASE_URL, retry=RetryPolicy(total=0), cache=None
    )


def test_event_payload_is_json_ready() -> None:
    payload = event_payload(_event())

    assert payload == {
        "kind": "citation-fetch",
        "dmp_id": "https://doi.org/10.48321/D1ABCD",
        "source": "dmptool",
        "detail": {"identifiers": ["https://doi.org/10.1/a"]},
        "occurred_at": "2024-03-01T12:00:00+00:00",
    }


def test_logging_publisher_keeps_events() -> None:
    publisher = LoggingEventPublisher()

    publisher.publish(_event())

    assert [event.kind for event in publisher.published] == [EventKind.CITATION_FETCH]


def test_http_publisher_posts_to_the_webhook() -> None:
    captured: list[tuple[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append((str(request.url), json.loads(request.content)))
        return httpx.Response(202)

    publisher = HttpEventPublisher(
        config=_config(), path="hooks/dmp", client_factory=_make_client_factory(handler)
    )
    publisher.publish(_event())

    assert captured == [(f"{BASE_URL}hooks/dmp", event_payload(_event()))]


def test_http_publisher_wraps_failures() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    publisher = HttpEventPublisher(
        config=_config(), attempts=1, client_factory=_make_client_factory(handler)
    )

    with pytest.raises(EventPublishError):
        publisher.publish(_event())


@pytest.mark.parametrize(
    "error",
    [httpx.InvalidURL("no host"), ValueError("cache entry unreadable")],
    ids=["invalid-url", "cache-failure"],
)
def test_http_publisher_wraps_non_http_failures(error: Exception) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        raise error

    publisher = HttpEventPublisher(
        config=_config(), attempts=1, client_factory=_make_client_factory(handler)
    )

    with pytest.raises(EventPublishError):
        publisher.publish(_event())
