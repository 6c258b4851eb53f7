"""
SWAPI Service Libraries Package.

Shared infrastructure for the SWAPI aggregator: structured logging, the
structured error model, the Result type, the typed Quart application and
HTTP metrics middleware.
"""

from services.libs.swapi_service_libs.result import Result

__all__ = ["Result"]
