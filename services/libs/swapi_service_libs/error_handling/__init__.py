"""Error handling utilities for the SWAPI aggregator services."""

from services.libs.swapi_service_libs.error_handling.error_models import ErrorCode, ErrorDetail
from services.libs.swapi_service_libs.error_handling.factories import (
    create_error_detail,
    raise_external_service_error,
    raise_upstream_unavailable,
)
from services.libs.swapi_service_libs.error_handling.swapi_error import SwapiServiceError

__all__ = [
    "ErrorCode",
    "ErrorDetail",
    "SwapiServiceError",
    "create_error_detail",
    "raise_external_service_error",
    "raise_upstream_unavailable",
]
