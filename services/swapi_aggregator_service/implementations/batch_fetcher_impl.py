"""Concurrent fixed-width batch fetcher."""

from __future__ import annotations

import asyncio
from uuid import UUID

from services.libs.swapi_service_libs.error_handling import raise_external_service_error
from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.enums_api import Collection
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics
from services.swapi_aggregator_service.models_domain import FetchOutcome, TransportError
from services.swapi_aggregator_service.protocols import (
    BatchFetcherProtocol,
    ResourceClientProtocol,
)

logger = create_service_logger("swapi_aggregator.batch_fetcher")


class BatchFetcherImpl(BatchFetcherProtocol):
    """Fan out one fetch per index, join all of them, keep positional order.

    The window itself is the concurrency bound: exactly ``width`` fetches are
    in flight while a batch runs.

    The join is total: a failing fetch never cancels its siblings. Transport
    errors are only reported once every call in the window has finished.
    """

    def __init__(self, client: ResourceClientProtocol, metrics: SwapiAggregatorMetrics) -> None:
        self.client = client
        self.metrics = metrics

    async def fetch_batch(
        self,
        collection: Collection,
        start_index: int,
        width: int,
        correlation_id: UUID,
    ) -> list[FetchOutcome]:
        if start_index < 1 or width < 1:
            raise ValueError(f"Invalid batch window start={start_index} width={width}")

        indices = range(start_index, start_index + width)
        outcomes: list[FetchOutcome] = list(
            await asyncio.gather(*(self.client.fetch(collection, index) for index in indices))
        )
        self.metrics.batches_total.labels(collection=collection.value).inc()

        failures = [outcome for outcome in outcomes if isinstance(outcome, TransportError)]
        if failures:
            logger.warning(
                "Batch contained transport errors",
                collection=collection.value,
                start_index=start_index,
                failed_indices=[failure.index for failure in failures],
            )
            raise_external_service_error(
                service="swapi_aggregator_service",
                operation="fetch_batch",
                external_service="swapi",
                message=(
                    f"{len(failures)} of {width} {collection.value} fetches failed "
                    f"in batch starting at {start_index}"
                ),
                correlation_id=correlation_id,
                collection=collection.value,
                start_index=start_index,
                failed_indices=[failure.index for failure in failures],
                causes=[failure.cause for failure in failures],
            )

        return outcomes
