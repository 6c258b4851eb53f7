"""Aggregator service: runs pagination and shapes the endpoint responses."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional
from uuid import UUID

from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.enums_api import Collection, SortKey
from services.swapi_aggregator_service.models_domain import PersonRecord
from services.swapi_aggregator_service.protocols import (
    PaginationEngineProtocol,
    ResidentResolverProtocol,
    ResourceAggregatorProtocol,
)

logger = create_service_logger("swapi_aggregator.aggregator_service")

# Present values sort before absent ones
_PRESENT, _ABSENT = 0, 1


def parse_measure(value: Optional[str]) -> Optional[float]:
    """Parse an upstream measure such as "172" or "1,358"; None if not numeric."""
    if value is None:
        return None
    try:
        number = float(value.replace(",", ""))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _by_name(person: PersonRecord) -> tuple[int, str]:
    return (_PRESENT, person.name)


def _by_height(person: PersonRecord) -> tuple[int, float]:
    height = parse_measure(person.height)
    return (_ABSENT, 0.0) if height is None else (_PRESENT, height)


def _by_mass(person: PersonRecord) -> tuple[int, float]:
    mass = parse_measure(person.mass)
    return (_ABSENT, 0.0) if mass is None else (_PRESENT, mass)


SORT_KEY_FUNCTIONS: dict[SortKey, Callable[[PersonRecord], tuple[int, Any]]] = {
    SortKey.NAME: _by_name,
    SortKey.HEIGHT: _by_height,
    SortKey.MASS: _by_mass,
}


def sort_people(people: list[PersonRecord], sort_key: SortKey) -> list[PersonRecord]:
    """Stable ascending sort; ties keep their fetch order, absent values go last.

    ``name`` compares strings. ``height`` and ``mass`` compare as numbers, so
    "96" sorts before "172" and "1,358" parses as 1358.
    """
    return sorted(people, key=SORT_KEY_FUNCTIONS[sort_key])


class AggregatorServiceImpl(ResourceAggregatorProtocol):
    """Implements the people and planets read endpoints."""

    def __init__(
        self,
        pagination_engine: PaginationEngineProtocol,
        resident_resolver: ResidentResolverProtocol,
    ) -> None:
        self.pagination_engine = pagination_engine
        self.resident_resolver = resident_resolver

    async def list_people(self, sort_key: SortKey, correlation_id: UUID) -> list[str]:
        found = await self.pagination_engine.run(Collection.PEOPLE, correlation_id)
        people = sort_people([PersonRecord.from_found(outcome) for outcome in found], sort_key)

        logger.info("People aggregated", count=len(people), sort_key=sort_key.value)
        return [person.name for person in people]

    async def list_planets(self, correlation_id: UUID) -> list[dict[str, Any]]:
        planets: list[dict[str, Any]] = await self.pagination_engine.run(
            Collection.PLANETS,
            correlation_id,
            batch_hook=self.resident_resolver.resolve_found,
        )

        logger.info("Planets aggregated", count=len(planets))
        return planets
