"""Public API routes for the aggregated people and planets collections."""

from __future__ import annotations

from uuid import UUID, uuid4

from dishka import FromDishka
from quart import Blueprint, Response, g, jsonify, request
from quart_dishka import inject

from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.enums_api import SortKey
from services.swapi_aggregator_service.protocols import ResourceAggregatorProtocol

logger = create_service_logger("swapi_aggregator.api.resources")

resource_bp = Blueprint("resources", __name__)


def _correlation_id() -> UUID:
    correlation_id = getattr(g, "correlation_id", None)
    return correlation_id if isinstance(correlation_id, UUID) else uuid4()


@resource_bp.route("/people", methods=["GET"])
@inject
async def list_people(
    aggregator: FromDishka[ResourceAggregatorProtocol],
) -> Response:
    """Return every person's name, ordered by the optional ``sortBy`` key."""
    raw_sort_by = request.args.get("sortBy")
    sort_key = SortKey.from_query(raw_sort_by)
    correlation_id = _correlation_id()

    if raw_sort_by is not None and raw_sort_by != sort_key.value:
        logger.info("Unrecognised sortBy, using default", sort_by=raw_sort_by)

    names = await aggregator.list_people(sort_key, correlation_id)
    return jsonify(names)


@resource_bp.route("/planets", methods=["GET"])
@inject
async def list_planets(
    aggregator: FromDishka[ResourceAggregatorProtocol],
) -> Response:
    """Return every planet with its residents resolved to names."""
    planets = await aggregator.list_planets(_correlation_id())
    return jsonify(planets)
