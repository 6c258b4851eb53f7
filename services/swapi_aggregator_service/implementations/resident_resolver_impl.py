"""Resolves planet resident reference URLs to person names."""

from __future__ import annotations

import asyncio
import re
from typing import Any, Optional, Sequence

from services.libs.swapi_service_libs import Result
from services.libs.swapi_service_libs.logging_utils import create_service_logger
from services.swapi_aggregator_service.config import Settings
from services.swapi_aggregator_service.enums_api import Collection
from services.swapi_aggregator_service.metrics import SwapiAggregatorMetrics
from services.swapi_aggregator_service.models_domain import (
    Found,
    NotFound,
    PlanetRecord,
    UnparseableReference,
)
from services.swapi_aggregator_service.protocols import (
    ResidentResolverProtocol,
    ResourceClientProtocol,
)

logger = create_service_logger("swapi_aggregator.resident_resolver")

# ".../people/5/" and ".../people/5" both end in the index
_TRAILING_INDEX = re.compile(r"/(\d+)/?$")


def parse_resource_index(reference: str) -> Result[int, UnparseableReference]:
    """Extract the trailing numeric path segment of a resource URL."""
    match = _TRAILING_INDEX.search(reference.strip())
    if match is None or int(match.group(1)) < 1:
        return Result.err(UnparseableReference(reference=reference))
    return Result.ok(int(match.group(1)))


class ResidentResolverImpl(ResidentResolverProtocol):
    """Fetch every resident of a planet concurrently and keep reference order.

    A resident that is missing, fails to fetch or has an unparseable URL
    resolves to None instead of failing the planet.
    """

    def __init__(
        self,
        client: ResourceClientProtocol,
        settings: Settings,
        metrics: SwapiAggregatorMetrics,
    ) -> None:
        self.client = client
        self.settings = settings
        self.metrics = metrics

    async def resolve(
        self, planet: PlanetRecord, semaphore: Optional[asyncio.Semaphore] = None
    ) -> list[Optional[str]]:
        if semaphore is None:
            semaphore = asyncio.Semaphore(self.settings.RESIDENT_MAX_CONCURRENCY)

        logger.info(
            "Processing residents",
            planet=planet.name,
            resident_count=len(planet.resident_refs),
        )
        names = await asyncio.gather(
            *(self._resolve_reference(ref, planet, semaphore) for ref in planet.resident_refs)
        )
        return list(names)

    async def resolve_batch(self, planets: Sequence[PlanetRecord]) -> list[dict[str, Any]]:
        semaphore = asyncio.Semaphore(self.settings.RESIDENT_MAX_CONCURRENCY)
        resolved = await asyncio.gather(*(self.resolve(planet, semaphore) for planet in planets))
        return [planet.to_response(names) for planet, names in zip(planets, resolved)]

    async def resolve_found(self, found: list[Found]) -> list[dict[str, Any]]:
        """Batch hook for the pagination engine."""
        return await self.resolve_batch([PlanetRecord.from_found(outcome) for outcome in found])

    async def _resolve_reference(
        self, reference: str, planet: PlanetRecord, semaphore: asyncio.Semaphore
    ) -> Optional[str]:
        parsed = parse_resource_index(reference)
        if parsed.is_err:
            self.metrics.resident_resolutions_total.labels(outcome="unparseable").inc()
            logger.warning(
                "Unparseable resident reference", planet=planet.name, reference=reference
            )
            return None

        async with semaphore:
            outcome = await self.client.fetch(Collection.PEOPLE, parsed.value)

        if isinstance(outcome, Found):
            self.metrics.resident_resolutions_total.labels(outcome="resolved").inc()
            return str(outcome.record["name"])

        label = "not_found" if isinstance(outcome, NotFound) else "failed"
        self.metrics.resident_resolutions_total.labels(outcome=label).inc()
        logger.warning(
            "Resident could not be resolved",
            planet=planet.name,
            reference=reference,
            outcome=type(outcome).__name__,
        )
        return None
