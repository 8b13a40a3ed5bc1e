"""Controlled enumerations for the hive-health domain.

Every categorical field in the domain MUST reference an enum defined here
or in ``hive_health.domain.codes``.  Free-form strings are only accepted at
the ingestion boundary and are normalised before the engine reasons on them.
"""

from __future__ import annotations

from enum import Enum


class HealthStatus(str, Enum):
    """Categorical verdict of one inspection, ordered by severity."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def worst(self, other: HealthStatus) -> HealthStatus:
        """Return the more severe of the two statuses."""
        return other if other.severity > self.severity else self


_SEVERITY = {
    HealthStatus.GREEN: 0,
    HealthStatus.YELLOW: 1,
    HealthStatus.RED: 2,
}


class Level(str, Enum):
    """Three-level scale for food storage and brood quality."""

    LOW = "low"
    OK = "ok"
    HIGH = "high"


class VarroaLevel(str, Enum):
    """Qualitative varroa infestation levels an inspector may record."""

    NOT_CHECKED = "not_checked"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Trend(str, Enum):
    """Score trajectory between two consecutive inspections."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class RevisitFilter(str, Enum):
    """Windows for selecting scheduled re-visits relative to today."""

    TODAY = "today"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    ALL = "all"
