"""
SWAPI Aggregator Service behavioral contracts and protocols.

This module defines the protocols (interfaces) that aggregator components
must implement, enabling dependency injection and testability.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence
from uuid import UUID

from services.swapi_aggregator_service.enums_api import Collection, SortKey
from services.swapi_aggregator_service.models_domain import FetchOutcome, Found, PlanetRecord

BatchHook = Callable[[list[Found]], Awaitable[list[Any]]]


class ResourceClientProtocol(Protocol):
    """Protocol for fetching a single upstream record."""

    async def fetch(self, collection: Collection, index: int) -> FetchOutcome:
        """
        Fetch one record by collection and 1-based index.

        Args:
            collection: Upstream collection to read from
            index: 1-based resource index

        Returns:
            Found, NotFound or TransportError. Never raises for upstream failures.
        """
        ...


class BatchFetcherProtocol(Protocol):
    """Protocol for concurrent fixed-width window fetches."""

    async def fetch_batch(
        self,
        collection: Collection,
        start_index: int,
        width: int,
        correlation_id: UUID,
    ) -> list[FetchOutcome]:
        """
        Fetch indices ``[start_index, start_index + width)`` concurrently.

        Returns:
            One outcome per index, in index order

        Raises:
            SwapiServiceError: If any fetch in the window hit a transport error
        """
        ...


class PaginationEngineProtocol(Protocol):
    """Protocol for running a paginated collection walk to completion."""

    async def run(
        self,
        collection: Collection,
        correlation_id: UUID,
        batch_hook: Optional[BatchHook] = None,
    ) -> list[Any]:
        """
        Walk the collection batch by batch until the miss policy stops it.

        Args:
            collection: Upstream collection to walk
            correlation_id: Request correlation ID for tracing
            batch_hook: Optional async transform applied to each batch's
                found records before they are accumulated

        Raises:
            SwapiServiceError: If a batch still fails after all retry attempts
        """
        ...


class ResidentResolverProtocol(Protocol):
    """Protocol for resolving planet resident references to person names."""

    async def resolve(self, planet: PlanetRecord) -> list[Optional[str]]:
        """Resolve residents in reference order; unresolved entries are None."""
        ...

    async def resolve_batch(self, planets: Sequence[PlanetRecord]) -> list[dict[str, Any]]:
        """Resolve several planets concurrently, returning response objects in input order."""
        ...

    async def resolve_found(self, found: list[Found]) -> list[dict[str, Any]]:
        """Project found planet outcomes and resolve them; usable as a BatchHook."""
        ...


class ResourceAggregatorProtocol(Protocol):
    """Protocol for the two aggregated read endpoints."""

    async def list_people(self, sort_key: SortKey, correlation_id: UUID) -> list[str]:
        """Return all people names ordered by ``sort_key``."""
        ...

    async def list_planets(self, correlation_id: UUID) -> list[dict[str, Any]]:
        """Return all planets with residents resolved to names."""
        ...
