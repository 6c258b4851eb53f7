"""Dependency injection configuration for the SWAPI Aggregator Service."""

from __future__ import annotations

from typing import AsyncIterator

import aiohttp
from dishka import Provider, Scope, provide
from prometheus_client import CollectorRegistry

from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.config import Settings, settings
from services.swapi_aggregator_service.implementations.aggregator_service_impl import (
    AggregatorServiceImpl,
)
from services.swapi_aggregator_service.implementations.batch_fetcher_impl import (
    BatchFetcherImpl,
)
from services.swapi_aggregator_service.implementations.pagination_engine_impl import (
    PaginationEngineImpl,
)
from services.swapi_aggregator_service.implementations.resident_resolver_impl import (
    ResidentResolverImpl,
)
from services.swapi_aggregator_service.implementations.swapi_client_impl import SwapiClientImpl
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics
from services.swapi_aggregator_service.protocols import (
    BatchFetcherProtocol,
    PaginationEngineProtocol,
    ResidentResolverProtocol,
    ResourceAggregatorProtocol,
    ResourceClientProtocol,
)

logger = create_service_logger("swapi_aggregator.di")


class CoreInfrastructureProvider(Provider):
    """Provider for settings, metrics and the shared HTTP session."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide service settings."""
        return settings

    @provide
    def provide_collector_registry(self) -> CollectorRegistry:
        """Provide a service-local Prometheus collector registry."""
        return CollectorRegistry()

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> SwapiAggregatorMetrics:
        """Provide aggregator metrics bound to the service registry."""
        return SwapiAggregatorMetrics(registry)

    @provide
    async def provide_http_session(
        self, settings: Settings
    ) -> AsyncIterator[aiohttp.ClientSession]:
        """Provide the upstream HTTP session; closed with the container."""
        connector = aiohttp.TCPConnector(limit=settings.HTTP_CONNECTION_LIMIT)
        async with aiohttp.ClientSession(
            connector=connector, headers={"Accept": "application/json"}
        ) as session:
            logger.info("Upstream HTTP session opened", base_url=settings.SWAPI_BASE_URL)
            yield session
        logger.info("Upstream HTTP session closed")


class ServiceProvider(Provider):
    """Provider for the fetch, pagination and aggregation components."""

    scope = Scope.APP

    @provide
    def provide_resource_client(
        self,
        settings: Settings,
        http_session: aiohttp.ClientSession,
        metrics: SwapiAggregatorMetrics,
    ) -> ResourceClientProtocol:
        """Provide the SWAPI single-record client."""
        return SwapiClientImpl(settings, http_session, metrics)

    @provide
    def provide_batch_fetcher(
        self, client: ResourceClientProtocol, metrics: SwapiAggregatorMetrics
    ) -> BatchFetcherProtocol:
        """Provide the concurrent batch fetcher."""
        return BatchFetcherImpl(client, metrics)

    @provide
    def provide_pagination_engine(
        self,
        batch_fetcher: BatchFetcherProtocol,
        settings: Settings,
        metrics: SwapiAggregatorMetrics,
    ) -> PaginationEngineProtocol:
        """Provide the pagination engine."""
        return PaginationEngineImpl(batch_fetcher, settings, metrics)

    @provide
    def provide_resident_resolver(
        self,
        client: ResourceClientProtocol,
        settings: Settings,
        metrics: SwapiAggregatorMetrics,
    ) -> ResidentResolverProtocol:
        """Provide the planet resident resolver."""
        return ResidentResolverImpl(client, settings, metrics)

    @provide
    def provide_aggregator_service(
        self,
        pagination_engine: PaginationEngineProtocol,
        resident_resolver: ResidentResolverProtocol,
    ) -> ResourceAggregatorProtocol:
        """Provide the aggregator service used by the routes."""
        return AggregatorServiceImpl(pagination_engine, resident_resolver)


__all__ = [
    "CoreInfrastructureProvider",
    "ServiceProvider",
]
