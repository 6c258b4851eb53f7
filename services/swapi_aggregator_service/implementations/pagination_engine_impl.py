"""Pagination engine: walks an unbounded index space in sequential batches."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import UUID

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from services.libs.swapi_service_libs.error_handling import (
    ErrorCode,
    SwapiServiceError,
    raise_upstream_unavailable,
)
from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.config import Settings
from services.swapi_aggregator_service.enums_api import Collection, RunState
from services.swapi_aggregator_service.implementations.miss_tracker import MissTracker
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics
from services.swapi_aggregator_service.models_domain import FetchOutcome, Found, NotFound
from services.swapi_aggregator_service.protocols import (
    BatchFetcherProtocol,
    BatchHook,
    PaginationEngineProtocol,
)

logger = create_service_logger("swapi_aggregator.pagination_engine")


def _is_batch_transport_failure(exception: BaseException) -> bool:
    return (
        isinstance(exception, SwapiServiceError)
        and exception.error_detail.error_code is ErrorCode.EXTERNAL_SERVICE_ERROR
    )


@dataclass
class PaginationRun:
    """State owned by a single request's walk over one collection."""

    collection: Collection
    tracker: MissTracker
    cursor: int = 1
    batches: int = 0
    state: RunState = RunState.RUNNING
    records: list[Any] = field(default_factory=list)

    def advance(self, width: int) -> None:
        self.cursor += width
        self.batches += 1

    def stop(self) -> None:
        self.state = RunState.STOPPED


class PaginationEngineImpl(PaginationEngineProtocol):
    """Runs batches until the miss tracker or the batch ceiling stops the run.

    Batches are strictly sequential. A batch that fails with transport errors
    is re-issued at the same cursor with exponential backoff; misses from a
    failed attempt are never counted.
    """

    def __init__(
        self,
        batch_fetcher: BatchFetcherProtocol,
        settings: Settings,
        metrics: SwapiAggregatorMetrics,
    ) -> None:
        self.batch_fetcher = batch_fetcher
        self.settings = settings
        self.metrics = metrics

    def new_run(self, collection: Collection) -> PaginationRun:
        tracker = MissTracker(
            threshold=self.settings.miss_threshold_for(collection),
            policy=self.settings.MISS_POLICY,
        )
        return PaginationRun(collection=collection, tracker=tracker)

    async def run(
        self,
        collection: Collection,
        correlation_id: UUID,
        batch_hook: Optional[BatchHook] = None,
    ) -> list[Any]:
        run = self.new_run(collection)
        width = self.settings.BATCH_WIDTH
        started = time.monotonic()
        status = "failed"

        logger.info(
            "Pagination run started",
            collection=collection.value,
            width=width,
            miss_threshold=run.tracker.threshold,
            miss_policy=run.tracker.policy.value,
        )

        try:
            while run.state is RunState.RUNNING:
                outcomes = await self._fetch_batch_with_retry(run, width, correlation_id)

                found: list[Found] = []
                for outcome in outcomes:
                    run.tracker.observe(outcome)
                    if isinstance(outcome, Found):
                        found.append(outcome)
                    elif isinstance(outcome, NotFound):
                        logger.info(
                            "No record at index",
                            collection=collection.value,
                            index=outcome.index,
                            total_misses=run.tracker.total_misses,
                        )

                if batch_hook is not None and found:
                    run.records.extend(await batch_hook(found))
                else:
                    run.records.extend(found)

                run.advance(width)

                if run.tracker.should_stop():
                    logger.info(
                        "Max misses reached, assuming content consumed",
                        collection=collection.value,
                        records=len(run.records),
                        batches=run.batches,
                    )
                    run.stop()
                elif run.batches >= self.settings.MAX_BATCHES_PER_RUN:
                    logger.warning(
                        "Batch ceiling reached before miss threshold, stopping run",
                        collection=collection.value,
                        max_batches=self.settings.MAX_BATCHES_PER_RUN,
                        records=len(run.records),
                    )
                    run.stop()

            status = "completed"
            return run.records
        finally:
            self.metrics.pagination_runs_total.labels(
                collection=collection.value, status=status
            ).inc()
            self.metrics.pagination_run_duration.labels(collection=collection.value).observe(
                time.monotonic() - started
            )

    async def _fetch_batch_with_retry(
        self, run: PaginationRun, width: int, correlation_id: UUID
    ) -> list[FetchOutcome]:
        attempts = self.settings.BATCH_RETRY_ATTEMPTS
        collection = run.collection

        def before_sleep(retry_state: RetryCallState) -> None:
            self.metrics.batch_retries_total.labels(collection=collection.value).inc()
            logger.warning(
                "Retrying batch at same cursor",
                collection=collection.value,
                cursor=run.cursor,
                attempt=retry_state.attempt_number + 1,
                max_attempts=attempts,
                error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
            )

        retryer = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(
                min=self.settings.BATCH_RETRY_WAIT_MIN_SECONDS,
                max=self.settings.BATCH_RETRY_WAIT_MAX_SECONDS,
            ),
            retry=retry_if_exception(_is_batch_transport_failure),
            reraise=True,
            before_sleep=before_sleep,
        )

        try:
            async for attempt in retryer:
                with attempt:
                    return await self.batch_fetcher.fetch_batch(
                        collection, run.cursor, width, correlation_id
                    )
        except SwapiServiceError as e:
            if not _is_batch_transport_failure(e):
                raise
            logger.error(
                "Batch failed after all retry attempts",
                collection=collection.value,
                cursor=run.cursor,
                attempts=attempts,
            )
            raise_upstream_unavailable(
                service="swapi_aggregator_service",
                operation="pagination_engine.run",
                external_service="swapi",
                attempts=attempts,
                correlation_id=correlation_id,
                collection=collection.value,
                cursor=run.cursor,
                last_error=e.error_detail.message,
            )

        # This should never be reached, but satisfies mypy
        raise RuntimeError("Retry loop completed without returning or raising")
