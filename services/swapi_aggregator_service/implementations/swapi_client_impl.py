"""Star Wars API client implementation."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from services.libs.swapi_service_libs.error_handling import ErrorCode
from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.config import Settings
from services.swapi_aggregator_service.enums_api import Collection
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics
from services.swapi_aggregator_service.models_domain import (
    FetchOutcome,
    Found,
    NotFound,
    TransportError,
)
from services.swapi_aggregator_service.protocols import ResourceClientProtocol

logger = create_service_logger("swapi_aggregator.swapi_client")


class SwapiClientImpl(ResourceClientProtocol):
    """HTTP client for single-record reads from the Star Wars API."""

    def __init__(
        self,
        settings: Settings,
        http_session: aiohttp.ClientSession,
        metrics: SwapiAggregatorMetrics,
    ) -> None:
        self.settings = settings
        self.http_session = http_session
        self.metrics = metrics
        self.base_url = settings.SWAPI_BASE_URL.rstrip("/")

    def resource_url(self, collection: Collection, index: int) -> str:
        return f"{self.base_url}/{collection.value}/{index}/"

    async def fetch(self, collection: Collection, index: int) -> FetchOutcome:
        """
        Fetch one record and classify it.

        A 404, or any decoded body without a non-empty "name", is NotFound.
        Timeouts, connection failures, other HTTP error statuses and
        empty or undecodable bodies are TransportError. No retries happen here.
        """
        url = self.resource_url(collection, index)
        in_flight = self.metrics.upstream_fetches_in_flight.labels(collection=collection.value)

        in_flight.inc()
        try:
            outcome = await self._get(url, index)
        finally:
            in_flight.dec()

        self.metrics.upstream_fetches_total.labels(
            collection=collection.value, outcome=type(outcome).__name__
        ).inc()

        if isinstance(outcome, TransportError):
            logger.warning(
                "Upstream fetch failed",
                collection=collection.value,
                index=index,
                error_code=outcome.error_code.value,
                cause=outcome.cause,
            )
        elif isinstance(outcome, NotFound):
            logger.debug("No record at index", collection=collection.value, index=index)
        else:
            logger.debug(
                "Record found",
                collection=collection.value,
                index=index,
                name=outcome.record["name"],
            )
        return outcome

    async def _get(self, url: str, index: int) -> FetchOutcome:
        timeout = aiohttp.ClientTimeout(total=self.settings.FETCH_TIMEOUT_SECONDS)
        try:
            async with self.http_session.get(url, timeout=timeout) as response:
                if response.status == 404:
                    return NotFound(index=index)
                if response.status >= 400:
                    return TransportError(
                        index=index,
                        error_code=ErrorCode.EXTERNAL_SERVICE_ERROR,
                        cause=f"HTTP {response.status} from {url}",
                    )
                raw = await response.read()
                if not raw.strip():
                    return TransportError(
                        index=index,
                        error_code=ErrorCode.INVALID_RESPONSE,
                        cause=f"Empty body from {url}",
                    )
                body: Any = await response.json(content_type=None)

        except asyncio.TimeoutError:
            return TransportError(
                index=index,
                error_code=ErrorCode.TIMEOUT,
                cause=f"Timed out after {self.settings.FETCH_TIMEOUT_SECONDS}s",
            )
        except aiohttp.ClientError as e:
            return TransportError(
                index=index,
                error_code=ErrorCode.CONNECTION_ERROR,
                cause=f"{type(e).__name__}: {e}",
            )
        except ValueError as e:
            # Body was not JSON
            return TransportError(
                index=index,
                error_code=ErrorCode.INVALID_RESPONSE,
                cause=f"Undecodable body: {e}",
            )

        if isinstance(body, dict) and body.get("name"):
            return Found(index=index, record=body)
        return NotFound(index=index)
