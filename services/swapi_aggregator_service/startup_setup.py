"""Startup and shutdown logic for the SWAPI Aggregator Service."""

from __future__ import annotations

from dishka import AsyncContainer, make_async_container
from prometheus_client import CollectorRegistry, Counter, Histogram

from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.libs.swapi_service_libs.quart_app import SwapiServiceApp
from services.swapi_aggregator_service.di import CoreInfrastructureProvider, ServiceProvider

logger = create_service_logger("swapi_aggregator.startup")


def create_di_container() -> AsyncContainer:
    """Creates and returns the DI AsyncContainer."""
    container = make_async_container(CoreInfrastructureProvider(), ServiceProvider())
    logger.info("DI AsyncContainer created.")
    return container


async def initialize_services(app: SwapiServiceApp) -> None:
    """Create HTTP metrics on the container's registry and store them on the app."""
    try:
        registry = await app.container.get(CollectorRegistry)
        app.extensions["metrics"] = _create_metrics(registry)
        logger.info("SWAPI Aggregator Service metrics initialized successfully.")
    except Exception as e:
        logger.critical(f"Failed to initialize SWAPI Aggregator Service: {e}", exc_info=True)
        raise


async def shutdown_services(app: SwapiServiceApp) -> None:
    """Close the DI container, which closes the upstream HTTP session."""
    try:
        await app.container.close()
        logger.info("SWAPI Aggregator Service DI container closed")
    except Exception as e:
        logger.error(f"Error during SWAPI Aggregator Service shutdown: {e}", exc_info=True)


def _create_metrics(registry: CollectorRegistry) -> dict:
    """Create Prometheus metrics instances for HTTP middleware."""
    return {
        "http_requests_total": Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=registry,
        ),
        "http_request_duration_seconds": Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=registry,
        ),
    }
