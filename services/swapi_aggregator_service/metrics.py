"""Service-specific metrics for the SWAPI Aggregator Service."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from services.libs.swapi_service_libs.logging_utils import create_service_logger

logger = create_service_logger("swapi_aggregator.metrics")


class SwapiAggregatorMetrics:
    """Upstream fetch, pagination and resolution metrics bound to one registry."""

    def __init__(self, registry: CollectorRegistry) -> None:
        # Upstream client metrics
        self.upstream_fetches_total = Counter(
            "swapi_upstream_fetches_total",
            "Total upstream record fetches",
            ["collection", "outcome"],
            registry=registry,
        )

        self.upstream_fetches_in_flight = Gauge(
            "swapi_upstream_fetches_in_flight",
            "Upstream fetches currently awaiting a response",
            ["collection"],
            registry=registry,
        )

        # Pagination metrics
        self.batches_total = Counter(
            "swapi_batches_total", "Total batches fetched", ["collection"], registry=registry
        )

        self.batch_retries_total = Counter(
            "swapi_batch_retries_total",
            "Batches re-issued at the same cursor after a transport failure",
            ["collection"],
            registry=registry,
        )

        self.pagination_runs_total = Counter(
            "swapi_pagination_runs_total",
            "Completed pagination runs",
            ["collection", "status"],
            registry=registry,
        )

        self.pagination_run_duration = Histogram(
            "swapi_pagination_run_duration_seconds",
            "Pagination run duration",
            ["collection"],
            registry=registry,
        )

        # Resident resolution metrics
        self.resident_resolutions_total = Counter(
            "swapi_resident_resolutions_total",
            "Resident reference resolutions",
            ["outcome"],
            registry=registry,
        )

        logger.debug("SWAPI aggregator metrics registered")
