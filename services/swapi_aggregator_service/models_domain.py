"""
Domain models for the SWAPI Aggregator Service.

``FetchOutcome`` is the tagged result of one upstream fetch. Person and
planet records are projections of ``Found`` bodies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from services.libs.swapi_service_libs.error_handling import ErrorCode


@dataclass(frozen=True)
class Found:
    """The upstream returned a record with a non-empty "name"."""

    index: int
    record: dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    """The index is a sparse hole (404, or a body without a name)."""

    index: int


@dataclass(frozen=True)
class TransportError:
    """Network, timeout, HTTP status or decode failure for one fetch."""

    index: int
    error_code: ErrorCode
    cause: str


FetchOutcome = Union[Found, NotFound, TransportError]


@dataclass(frozen=True)
class UnparseableReference:
    """A resident reference URL without a numeric trailing index."""

    reference: str


def _present(value: Any) -> Optional[str]:
    return str(value) if value else None


@dataclass(frozen=True)
class PersonRecord:
    index: int
    name: str
    height: Optional[str] = None
    mass: Optional[str] = None

    @classmethod
    def from_found(cls, outcome: Found) -> PersonRecord:
        record = outcome.record
        return cls(
            index=outcome.index,
            name=str(record["name"]),
            height=_present(record.get("height")),
            mass=_present(record.get("mass")),
        )


@dataclass(frozen=True)
class PlanetRecord:
    """A planet with its resident references split from the pass-through fields."""

    index: int
    name: str
    resident_refs: tuple[str, ...] = ()
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_found(cls, outcome: Found) -> PlanetRecord:
        record = dict(outcome.record)
        residents = record.get("residents") or []
        return cls(
            index=outcome.index,
            name=str(record["name"]),
            resident_refs=tuple(str(ref) for ref in residents),
            fields=record,
        )

    def to_response(self, resident_names: list[Optional[str]]) -> dict[str, Any]:
        """Upstream fields unchanged except ``residents``, which become names."""
        return {**self.fields, "residents": list(resident_names)}
