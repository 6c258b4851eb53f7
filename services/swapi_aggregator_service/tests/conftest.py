"""
Pytest configuration and fixtures for SWAPI Aggregator Service tests.

Provides test settings with zero retry backoff, a fresh metrics registry per
test, and an in-memory resource client that records concurrency.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

import pytest
from prometheus_client import CollectorRegistry

from services.libs.swapi_service_libs.error_handling import ErrorCode
from services.swapi_aggregator_service.config import Settings
from services.swapi_aggregator_service.enums_api import Collection
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics
from services.swapi_aggregator_service.models_domain import (
    FetchOutcome,
    Found,
    NotFound,
    TransportError,
)


class FakeResourceClient:
    """In-memory ResourceClientProtocol implementation.

    ``records`` maps (collection, index) to a body; anything absent is
    NotFound. ``failures`` maps (collection, index) to how many times that
    fetch returns a TransportError before succeeding (-1 means always).
    """

    def __init__(
        self,
        records: Optional[dict[tuple[Collection, int], dict[str, Any]]] = None,
        failures: Optional[dict[tuple[Collection, int], int]] = None,
        delay: float = 0.0,
    ) -> None:
        self.records = records or {}
        self.failures = dict(failures or {})
        self.delay = delay
        self.calls: list[tuple[Collection, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, collection: Collection, index: int) -> FetchOutcome:
        self.calls.append((collection, index))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            key = (collection, index)
            remaining = self.failures.get(key, 0)
            if remaining != 0:
                if remaining > 0:
                    self.failures[key] = remaining - 1
                return TransportError(
                    index=index, error_code=ErrorCode.CONNECTION_ERROR, cause="connection reset"
                )
            record = self.records.get(key)
            if record is None:
                return NotFound(index=index)
            return Found(index=index, record=record)
        finally:
            self.in_flight -= 1


def people_records(
    indices: range | list[int], heights: Optional[dict[int, str]] = None
) -> dict[tuple[Collection, int], dict[str, Any]]:
    """Build people bodies named "Person <index>" for the given indices."""
    heights = heights or {}
    return {
        (Collection.PEOPLE, index): {
            "name": f"Person {index}",
            "height": heights.get(index, str(100 + index)),
            "mass": str(50 + index),
        }
        for index in indices
    }


def planet_records(
    indices: range | list[int], residents: Optional[dict[int, list[str]]] = None
) -> dict[tuple[Collection, int], dict[str, Any]]:
    residents = residents or {}
    return {
        (Collection.PLANETS, index): {
            "name": f"Planet {index}",
            "climate": "temperate",
            "residents": residents.get(index, []),
        }
        for index in indices
    }


@pytest.fixture
def test_settings() -> Settings:
    """Settings with the original thresholds and instant retries."""
    return Settings(
        SWAPI_BASE_URL="https://swapi.test/api",
        BATCH_WIDTH=10,
        PEOPLE_MISS_THRESHOLD=5,
        PLANETS_MISS_THRESHOLD=3,
        BATCH_RETRY_ATTEMPTS=3,
        BATCH_RETRY_WAIT_MIN_SECONDS=0,
        BATCH_RETRY_WAIT_MAX_SECONDS=0,
        MAX_BATCHES_PER_RUN=50,
        FETCH_TIMEOUT_SECONDS=2,
    )


@pytest.fixture
def registry() -> CollectorRegistry:
    """Provide a fresh registry for each test."""
    return CollectorRegistry()


@pytest.fixture
def metrics(registry: CollectorRegistry) -> SwapiAggregatorMetrics:
    return SwapiAggregatorMetrics(registry)


@pytest.fixture
def fake_client_factory() -> Callable[..., FakeResourceClient]:
    return FakeResourceClient


@pytest.fixture
def people_factory() -> Callable[..., dict[tuple[Collection, int], dict[str, Any]]]:
    return people_records


@pytest.fixture
def planet_factory() -> Callable[..., dict[tuple[Collection, int], dict[str, Any]]]:
    return planet_records
