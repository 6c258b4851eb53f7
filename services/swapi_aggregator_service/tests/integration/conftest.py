"""
Integration fixtures: the full Quart app over a real DI container.

Only the upstream HTTP layer is replaced, by aioresponses. Any index without
a registered record answers 404 so pagination terminates normally.
"""

from __future__ import annotations

from typing import AsyncIterator, Iterator

import aiohttp
import pytest
from aioresponses import aioresponses
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from prometheus_client import CollectorRegistry
from quart.typing import TestClientProtocol

from services.swapi_aggregator_service.app import create_app
from services.swapi_aggregator_service.config import Settings
from services.swapi_aggregator_service.di import ServiceProvider
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics


class StubInfrastructureProvider(Provider):
    """Infrastructure provider bound to the test settings."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(scope=Scope.APP)
        self._settings = settings

    @provide
    def provide_settings(self) -> Settings:
        return self._settings

    @provide
    def provide_collector_registry(self) -> CollectorRegistry:
        return CollectorRegistry()

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> SwapiAggregatorMetrics:
        return SwapiAggregatorMetrics(registry)

    @provide
    async def provide_http_session(self) -> AsyncIterator[aiohttp.ClientSession]:
        async with aiohttp.ClientSession() as session:
            yield session


@pytest.fixture
def container(test_settings: Settings) -> AsyncContainer:
    return make_async_container(StubInfrastructureProvider(test_settings), ServiceProvider())


@pytest.fixture
def mock_swapi() -> Iterator[aioresponses]:
    with aioresponses() as mocked:
        yield mocked


@pytest.fixture
async def client(
    container: AsyncContainer, mock_swapi: aioresponses
) -> AsyncIterator[TestClientProtocol]:
    """Test client for an app whose startup and shutdown hooks have run."""
    app = create_app(container=container)
    async with app.test_app() as test_app:
        yield test_app.test_client()

