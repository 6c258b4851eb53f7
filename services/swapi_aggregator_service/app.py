"""Main application entry point for the SWAPI Aggregator Service."""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from dishka import AsyncContainer
from quart import Response, g, jsonify
from quart_dishka import QuartDishka
from werkzeug.exceptions import HTTPException

from services.libs.swapi_service_libs.correlation_middleware import setup_correlation_middleware
from services.libs.swapi_service_libs.error_handling import (
    ErrorCode,
    SwapiServiceError,
    create_error_detail,
)
from services.libs.swapi_service_libs.error_handling.quart import create_error_response
from services.libs.swapi_service_libs.logging_utils import (
    configure_service_logging,
    create_service_logger,
)
from services.libs.swapi_service_libs.metrics_middleware import setup_metrics_middleware
from services.libs.swapi_service_libs.quart_app import SwapiServiceApp
from services.swapi_aggregator_service import startup_setup
from services.swapi_aggregator_service.api.health_routes import health_bp
from services.swapi_aggregator_service.api.resource_routes import resource_bp
from services.swapi_aggregator_service.config import settings

# Configure centralized structured logging before creating logger
configure_service_logging(
    service_name=settings.SERVICE_NAME,
    environment=settings.ENVIRONMENT.value,
    log_level=settings.LOG_LEVEL,
)
logger = create_service_logger("swapi_aggregator.app")


def register_error_handlers(app: SwapiServiceApp) -> None:
    """Map SwapiServiceError and unexpected exceptions to JSON error responses."""

    @app.errorhandler(SwapiServiceError)
    async def handle_swapi_error(error: SwapiServiceError) -> tuple[Response, int]:
        logger.error(
            "Request failed",
            error_code=error.error_code,
            operation=error.operation,
            error_message=error.error_detail.message,
        )
        return create_error_response(error.error_detail)

    @app.errorhandler(Exception)
    async def handle_general_error(error: Exception) -> tuple[Response, int]:
        if isinstance(error, HTTPException):
            return jsonify({"error": error.name, "message": error.description}), error.code or 500
        logger.error(f"Unexpected error: {error}", exc_info=True)
        error_detail = create_error_detail(
            error_code=ErrorCode.PROCESSING_ERROR,
            message="An unexpected error occurred during request processing",
            service=settings.SERVICE_NAME,
            operation="request_processing",
            correlation_id=getattr(g, "correlation_id", None) or uuid4(),
            details={"error_type": error.__class__.__name__},
        )
        return create_error_response(error_detail)


def create_app(container: Optional[AsyncContainer] = None) -> SwapiServiceApp:
    """Create and configure the Quart application."""
    app = SwapiServiceApp(__name__)

    app.container = container or startup_setup.create_di_container()
    QuartDishka(app=app, container=app.container)

    setup_correlation_middleware(app)
    setup_metrics_middleware(app, logger_name="swapi_aggregator.metrics")
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(resource_bp)

    @app.before_serving
    async def startup() -> None:
        """Initialize services on startup."""
        try:
            await startup_setup.initialize_services(app)
            logger.info(
                "SWAPI Aggregator Service started",
                host=settings.HOST,
                port=settings.PORT,
                upstream=settings.SWAPI_BASE_URL,
            )
        except Exception as e:
            logger.critical("Failed to start services", error=str(e), exc_info=True)
            raise

    @app.after_serving
    async def shutdown() -> None:
        """Gracefully shutdown services."""
        await startup_setup.shutdown_services(app)
        logger.info("SWAPI Aggregator Service shutdown complete")

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=settings.DEBUG, host=settings.HOST, port=settings.PORT)
