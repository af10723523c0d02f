"""DataCite GraphQL API client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from dmpsync.adapters.http_resilience import ResilientClient

from .schema import DataCiteResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from dmpsync.config.datacite import DataCiteConfig
    from dmpsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class DataCiteAPIError(RuntimeError):
    """Raised when the DataCite API returns an unexpected response."""


class DataCiteClient:
    """Low-level HTTP client for the DataCite GraphQL endpoint."""

    def __init__(
        self,
        *,
        config: DataCiteConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def query(self, body: Mapping[str, object]) -> DataCiteResponse:
        return asyncio.run(self._query_async(body))

    async def _query_async(self, body: Mapping[str, object]) -> DataCiteResponse:
        async with self._client_factory(self._resilience) as client:
            return await self._perform_request(client=client, body=body)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        body: Mapping[str, object],
    ) -> DataCiteResponse:
        operation = body.get("operationName", "query")
        try:
            response = await client.post(self._config.endpoint, json=dict(body))
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DataCiteAPIError(f"DataCite {operation} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise DataCiteAPIError(f"DataCite {operation} returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise DataCiteAPIError("Unexpected DataCite response payload")

        try:
            parsed = DataCiteResponse.model_validate(payload)
        except ValidationError as exc:
            raise DataCiteAPIError(f"DataCite {operation} response did not validate") from exc

        if parsed.errors:
            messages = "; ".join(error.message for error in parsed.errors)
            if parsed.data is None:
                raise DataCiteAPIError(f"DataCite {operation} errors: {messages}")
            log.warning("DataCite %s returned partial data: %s", operation, messages)
        return parsed
