"""Normalisation of raw inspection observations.

Field notes arrive in whatever words the beekeeper used ("faible",
"weak", "Excellent ").  Everything the rules look at is mapped here onto
the controlled enums, and the frame ratios are derived once.
"""

from __future__ import annotations

from dataclasses import dataclass

from hive_health.domain.enums import Level, VarroaLevel
from hive_health.domain.inspection import InspectionRecord

_LOW_SYNONYMS: frozenset[str] = frozenset({
    "low", "weak", "poor", "bad", "little", "few", "insufficient",
    "faible", "insuffisant", "mauvais", "pauvre", "bas",
})

_HIGH_SYNONYMS: frozenset[str] = frozenset({
    "high", "excellent", "strong", "good", "very good", "abundant", "plenty",
    "fort", "forte", "bon", "bonne", "abondant", "élevé", "eleve",
})

_VARROA_LEVELS: dict[str, VarroaLevel] = {v.value: v for v in VarroaLevel}


def normalize_level(raw: str | None) -> Level:
    """Map a free-text label onto low / ok / high.

    Unrecognised or absent labels are treated as ``ok``.
    """
    if raw is None:
        return Level.OK
    key = " ".join(raw.strip().lower().split())
    if key in _LOW_SYNONYMS:
        return Level.LOW
    if key in _HIGH_SYNONYMS:
        return Level.HIGH
    return Level.OK


def normalize_varroa(raw: str | None) -> VarroaLevel | None:
    """Pass through one of the four allowed literals, else None."""
    if raw is None:
        return None
    return _VARROA_LEVELS.get(raw.strip().lower())


def frame_ratio(part: int | None, total: int | None) -> float | None:
    if part is None or total is None or total <= 0:
        return None
    return round(part / total, 3)


@dataclass(frozen=True)
class NormalizedInspection:
    """Rule-ready view of an InspectionRecord.

    ``frame_count`` is the ratio denominator: the observed count, or the
    hive's frame capacity when the inspector did not record one.
    ``frame_count_observed`` says whether the inspector recorded it.
    """

    eggs_seen: bool | None
    larvae_present: bool | None
    queen_cell_present: bool | None
    sickness_signs: bool | None
    food: Level
    brood_quality: Level
    varroa: VarroaLevel | None
    frame_count: int | None
    frame_count_observed: bool
    bee_frames: int | None
    brood_frames: int | None
    bee_ratio: float | None
    brood_ratio: float | None


def normalize(record: InspectionRecord, frame_capacity: int | None = None) -> NormalizedInspection:
    """Build the normalised view of *record*."""
    observed = record.frame_count is not None
    frame_count = record.frame_count if observed else frame_capacity

    return NormalizedInspection(
        eggs_seen=record.eggs_seen,
        larvae_present=record.larvae_present,
        queen_cell_present=record.queen_cell_present,
        sickness_signs=record.sickness_signs,
        food=normalize_level(record.food_storage),
        brood_quality=normalize_level(record.brood_quality),
        varroa=normalize_varroa(record.varroa_level),
        frame_count=frame_count,
        frame_count_observed=observed,
        bee_frames=record.bee_frames,
        brood_frames=record.brood_frames,
        bee_ratio=frame_ratio(record.bee_frames, frame_count),
        brood_ratio=frame_ratio(record.brood_frames, frame_count),
    )
