"""Score, confidence and chip computation from a finished rule verdict.

Score:
    score = clamp(100 - Σ penalty(reason), 0, 100)
    then banded by status:
        red    → min(score, 49)
        yellow → min(score, 79)
        green  → max(score, 80)

Confidence:
    confidence = round(clamp(1.0 - 0.12 × missing_data_count, 0.35, 1.0), 2)

Both lookup tables below are read-only module data.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from hive_health.domain.codes import ChipCode, ReasonCode
from hive_health.domain.enums import HealthStatus

# ── Penalties ────────────────────────────────────────────────────────────────

REASON_PENALTIES: Mapping[ReasonCode, int] = MappingProxyType({
    # Missing observations
    ReasonCode.DATA_MISSING_FRAME_COUNT: 5,
    ReasonCode.DATA_MISSING_BEE_FRAMES: 5,
    ReasonCode.DATA_MISSING_BROOD_FRAMES: 5,
    ReasonCode.DATA_MISSING_LARVAE: 5,
    ReasonCode.DATA_MISSING_VARROA: 5,
    # Critical
    ReasonCode.SICKNESS_SIGNS_REPORTED: 60,
    ReasonCode.QUEEN_FAILURE_SUSPECTED: 55,
    ReasonCode.VARROA_HIGH: 50,
    ReasonCode.SWARM_RISK_IMMINENT: 45,
    # Needs attention
    ReasonCode.QUEEN_WEAK_OR_RECENTLY_LOST: 25,
    ReasonCode.QUEEN_CELLS_PRESENT: 20,
    ReasonCode.VARROA_MEDIUM: 20,
    ReasonCode.FOOD_LOW: 20,
    ReasonCode.COLONY_WEAK: 15,
    ReasonCode.BROOD_SMALL_BUT_VIABLE: 15,
    ReasonCode.BROOD_QUALITY_LOW: 15,
})

RED_SCORE_CEILING = 49
YELLOW_SCORE_CEILING = 79
GREEN_SCORE_FLOOR = 80

MIN_CONFIDENCE = 0.35

# ── Chips ────────────────────────────────────────────────────────────────────

STATUS_CHIPS: Mapping[HealthStatus, ChipCode] = MappingProxyType({
    HealthStatus.GREEN: ChipCode.CHIP_STABLE,
    HealthStatus.YELLOW: ChipCode.CHIP_NEEDS_ATTENTION,
    HealthStatus.RED: ChipCode.CHIP_URGENT,
})

# Highest priority first.
CHIP_PRIORITY: tuple[tuple[ReasonCode, ChipCode], ...] = (
    (ReasonCode.SICKNESS_SIGNS_REPORTED, ChipCode.CHIP_SICKNESS),
    (ReasonCode.QUEEN_FAILURE_SUSPECTED, ChipCode.CHIP_QUEEN_FAILURE),
    (ReasonCode.SWARM_RISK_IMMINENT, ChipCode.CHIP_SWARM_RISK),
    (ReasonCode.VARROA_HIGH, ChipCode.CHIP_VARROA_HIGH),
    (ReasonCode.FOOD_LOW, ChipCode.CHIP_FOOD_LOW),
    (ReasonCode.QUEEN_WEAK_OR_RECENTLY_LOST, ChipCode.CHIP_QUEEN_WEAK),
    (ReasonCode.VARROA_MEDIUM, ChipCode.CHIP_VARROA_MEDIUM),
    (ReasonCode.COLONY_WEAK, ChipCode.CHIP_COLONY_WEAK),
    (ReasonCode.BROOD_QUALITY_LOW, ChipCode.CHIP_BROOD_QUALITY_LOW),
    (ReasonCode.BROOD_SMALL_BUT_VIABLE, ChipCode.CHIP_BROOD_SMALL),
    (ReasonCode.VARROA_NOT_CHECKED, ChipCode.CHIP_VARROA_NOT_CHECKED),
)


def compute_score(status: HealthStatus, reasons: Iterable[ReasonCode]) -> int:
    raw = 100 - sum(REASON_PENALTIES.get(code, 0) for code in reasons)
    score = max(0, min(raw, 100))

    if status is HealthStatus.RED:
        return min(score, RED_SCORE_CEILING)
    if status is HealthStatus.YELLOW:
        return min(score, YELLOW_SCORE_CEILING)
    return max(score, GREEN_SCORE_FLOOR)


def compute_confidence(
    reasons: Iterable[ReasonCode],
    missing_penalty: float = 0.12,
    floor: float = MIN_CONFIDENCE,
) -> float:
    missing = sum(1 for code in reasons if code.is_missing_data)
    raw = 1.0 - missing_penalty * missing
    return round(max(floor, min(raw, 1.0)), 2)


def build_chips(
    status: HealthStatus,
    reasons: Iterable[ReasonCode],
    max_chips: int = 5,
) -> list[ChipCode]:
    """Status chip first, then reason chips in fixed priority order."""
    present = set(reasons)
    chips = [STATUS_CHIPS[status]]
    for reason, chip in CHIP_PRIORITY:
        if len(chips) >= max_chips:
            break
        if reason in present:
            chips.append(chip)
    return chips
