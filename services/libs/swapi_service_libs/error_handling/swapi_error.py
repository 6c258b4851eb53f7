"""SwapiServiceError: the single structured exception type of the aggregator."""

from __future__ import annotations

from services.libs.swapi_service_libs.error_handling.error_models import ErrorDetail


class SwapiServiceError(Exception):
    """Exception carrying a frozen ErrorDetail.

    Raised through the factory functions in ``factories`` so every error
    leaving a component has a code, service, operation and correlation id.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    def __str__(self) -> str:
        return f"[{self.error_detail.error_code.value}] {self.error_detail.message}"

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def operation(self) -> str:
        return self.error_detail.operation
