"""Health and metrics routes for the SWAPI Aggregator Service."""

from __future__ import annotations

from dishka import FromDishka
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from quart import Blueprint, Response, jsonify
from quart_dishka import inject

from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.config import Settings

logger = create_service_logger("swapi_aggregator.api.health")
health_bp = Blueprint("health_routes", __name__)


@health_bp.route("/healthz")
@inject
async def health_check(settings: FromDishka[Settings]) -> tuple[Response, int]:
    """Liveness check. The upstream API is not probed; requests discover its state."""
    health_response = {
        "service": settings.SERVICE_NAME,
        "status": "healthy",
        "message": "SWAPI Aggregator Service is healthy",
        "version": settings.SERVICE_VERSION,
        "checks": {"service_responsive": True},
        "dependencies": {"swapi": {"base_url": settings.SWAPI_BASE_URL}},
        "environment": settings.ENVIRONMENT.value,
    }
    return jsonify(health_response), 200


@health_bp.route("/metrics")
@inject
async def metrics(registry: FromDishka[CollectorRegistry]) -> Response:
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return Response(metrics_data, content_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return Response("Error generating metrics", status=500)
