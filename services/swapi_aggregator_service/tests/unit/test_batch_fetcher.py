"""Unit tests for BatchFetcherImpl fan-out and join behaviour."""

from __future__ import annotations

from typing import Any, Callable
from uuid import uuid4

import pytest

from services.libs.swapi_service_libs.error_handling import ErrorCode, SwapiServiceError
from services.swapi_aggregator_service.enums_api import Collection
from services.swapi_aggregator_service.implementations.batch_fetcher_impl import (
    BatchFetcherImpl,
)
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics
from services.swapi_aggregator_service.models_domain import Found, NotFound


class TestBatchFetcher:
    async def test_returns_one_outcome_per_index_in_order(
        self,
        fake_client_factory: Callable[..., Any],
        people_factory: Callable[..., Any],
        metrics: SwapiAggregatorMetrics,
    ) -> None:
        client = fake_client_factory(records=people_factory([11, 12, 14]), delay=0.001)
        fetcher = BatchFetcherImpl(client, metrics)

        outcomes = await fetcher.fetch_batch(Collection.PEOPLE, 11, 5, uuid4())

        assert [outcome.index for outcome in outcomes] == [11, 12, 13, 14, 15]
        assert [type(outcome) for outcome in outcomes] == [
            Found,
            Found,
            NotFound,
            Found,
            NotFound,
        ]

    async def test_all_calls_run_concurrently_within_width(
        self,
        fake_client_factory: Callable[..., Any],
        metrics: SwapiAggregatorMetrics,
    ) -> None:
        client = fake_client_factory(delay=0.01)
        fetcher = BatchFetcherImpl(client, metrics)

        await fetcher.fetch_batch(Collection.PEOPLE, 1, 10, uuid4())

        assert len(client.calls) == 10
        assert client.max_in_flight == 10

    async def test_transport_error_fails_batch_after_full_join(
        self,
        fake_client_factory: Callable[..., Any],
        people_factory: Callable[..., Any],
        metrics: SwapiAggregatorMetrics,
    ) -> None:
        client = fake_client_factory(
            records=people_factory(range(1, 11)),
            failures={(Collection.PEOPLE, 3): -1, (Collection.PEOPLE, 7): -1},
            delay=0.001,
        )
        fetcher = BatchFetcherImpl(client, metrics)
        correlation_id = uuid4()

        with pytest.raises(SwapiServiceError) as exc_info:
            await fetcher.fetch_batch(Collection.PEOPLE, 1, 10, correlation_id)

        error = exc_info.value
        assert error.error_detail.error_code is ErrorCode.EXTERNAL_SERVICE_ERROR
        assert error.error_detail.details["failed_indices"] == [3, 7]
        assert error.correlation_id == str(correlation_id)
        # Siblings of the failing calls still ran to completion
        assert sorted(index for _, index in client.calls) == list(range(1, 11))
        assert client.in_flight == 0

    @pytest.mark.parametrize("start_index, width", [(0, 10), (1, 0)])
    async def test_rejects_invalid_window(
        self,
        start_index: int,
        width: int,
        fake_client_factory: Callable[..., Any],
        metrics: SwapiAggregatorMetrics,
    ) -> None:
        fetcher = BatchFetcherImpl(fake_client_factory(), metrics)

        with pytest.raises(ValueError):
            await fetcher.fetch_batch(Collection.PEOPLE, start_index, width, uuid4())
