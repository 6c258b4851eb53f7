"""Quart integration: turn an ErrorDetail into an HTTP JSON response."""

from __future__ import annotations

from quart import Response, jsonify

from services.libs.swapi_service_libs.error_handling.error_models import ErrorCode, ErrorDetail

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.EXTERNAL_SERVICE_ERROR: 502,
    ErrorCode.CONNECTION_ERROR: 502,
    ErrorCode.INVALID_RESPONSE: 502,
    ErrorCode.TIMEOUT: 504,
    ErrorCode.UPSTREAM_UNAVAILABLE: 504,
    ErrorCode.PROCESSING_ERROR: 500,
}


def create_error_response(error_detail: ErrorDetail) -> tuple[Response, int]:
    """Render ``{"error": ErrorDetail}`` with the status mapped from its code."""
    status_code = ERROR_CODE_TO_HTTP_STATUS.get(error_detail.error_code, 500)
    response = jsonify({"error": error_detail.model_dump(mode="json")})
    response.headers["X-Correlation-ID"] = str(error_detail.correlation_id)
    return response, status_code
