"""Miss counting and the pagination termination predicate."""

from __future__ import annotations

from services.swapi_aggregator_service.enums_api import MissPolicy
from services.swapi_aggregator_service.models_domain import FetchOutcome, Found, NotFound


class MissTracker:
    """Counts NotFound outcomes for one pagination run.

    CUMULATIVE never resets, so where the misses fall does not matter.
    CONSECUTIVE resets the count whenever a record is found.
    TransportError outcomes never count as misses.
    """

    def __init__(self, threshold: int, policy: MissPolicy = MissPolicy.CUMULATIVE) -> None:
        if threshold < 1:
            raise ValueError(f"Miss threshold must be positive, got {threshold}")
        self.threshold = threshold
        self.policy = policy
        self._misses = 0
        self._total_misses = 0

    @property
    def misses(self) -> int:
        """Misses counted toward the threshold under the active policy."""
        return self._misses

    @property
    def total_misses(self) -> int:
        return self._total_misses

    def observe(self, outcome: FetchOutcome) -> None:
        if isinstance(outcome, NotFound):
            self._misses += 1
            self._total_misses += 1
        elif isinstance(outcome, Found) and self.policy is MissPolicy.CONSECUTIVE:
            self._misses = 0

    def should_stop(self) -> bool:
        return self._misses >= self.threshold
