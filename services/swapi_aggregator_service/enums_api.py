"""API and engine enumerations for the SWAPI Aggregator Service."""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Collection(str, Enum):
    """Upstream collections served by the aggregator."""

    PEOPLE = "people"
    PLANETS = "planets"


class SortKey(str, Enum):
    """Orderings accepted by ``GET /people?sortBy=``."""

    NAME = "name"
    HEIGHT = "height"
    MASS = "mass"

    @classmethod
    def from_query(cls, raw: str | None) -> SortKey:
        """Parse a query value; anything unrecognised falls back to NAME."""
        if raw is None:
            return cls.NAME
        try:
            return cls(raw)
        except ValueError:
            return cls.NAME


class MissPolicy(str, Enum):
    """How NotFound outcomes count toward stopping a pagination run."""

    CUMULATIVE = "cumulative"  # every miss in the run counts
    CONSECUTIVE = "consecutive"  # streak resets on any Found


class RunState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"
