"""Correlation id propagation for inbound HTTP requests."""

from __future__ import annotations

from uuid import UUID, uuid4

from quart import Quart, Response, g, request

from services.libs.swapi_service_libs.logging_utils import (
    bind_request_context,
    clear_request_context,
)

CORRELATION_HEADER = "X-Correlation-ID"


def _parse_correlation_id(raw: str | None) -> UUID:
    if raw:
        try:
            return UUID(raw)
        except ValueError:
            pass
    return uuid4()


def setup_correlation_middleware(app: Quart) -> None:
    """Bind ``g.correlation_id`` and structlog context for each request.

    The id is taken from the X-Correlation-ID header when it is a valid UUID,
    otherwise generated, and echoed on the response.
    """

    @app.before_request
    async def bind_correlation_id() -> None:
        g.correlation_id = _parse_correlation_id(request.headers.get(CORRELATION_HEADER))
        bind_request_context(
            str(g.correlation_id), method=request.method, path=request.path
        )

    @app.after_request
    async def echo_correlation_id(response: Response) -> Response:
        correlation_id = getattr(g, "correlation_id", None)
        if correlation_id is not None and CORRELATION_HEADER not in response.headers:
            response.headers[CORRELATION_HEADER] = str(correlation_id)
        clear_request_context()
        return response
