"""
Factory functions that build an ErrorDetail and raise SwapiServiceError.

Every factory takes the raising ``service`` and ``operation``, a human
readable ``message`` (or builds one) and the request ``correlation_id``.
Extra keyword arguments land in ``ErrorDetail.details``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, NoReturn
from uuid import UUID

from services.libs.swapi_service_libs.error_handling.error_models import ErrorCode, ErrorDetail
from services.libs.swapi_service_libs.error_handling.swapi_error import SwapiServiceError


def create_error_detail(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID,
    details: dict[str, Any] | None = None,
) -> ErrorDetail:
    """Build an ErrorDetail stamped with the current UTC time."""
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
    )


def raise_external_service_error(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    details: dict[str, Any] = {"external_service": external_service, **additional_context}
    raise SwapiServiceError(
        create_error_detail(
            ErrorCode.EXTERNAL_SERVICE_ERROR, message, service, operation, correlation_id, details
        )
    )


def raise_upstream_unavailable(
    service: str,
    operation: str,
    external_service: str,
    attempts: int,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise after a retried upstream call exhausted its attempts."""
    message = f"{external_service} unavailable after {attempts} attempts"
    details: dict[str, Any] = {
        "external_service": external_service,
        "attempts": attempts,
        **additional_context,
    }
    raise SwapiServiceError(
        create_error_detail(
            ErrorCode.UPSTREAM_UNAVAILABLE, message, service, operation, correlation_id, details
        )
    )
