"""Symbolic vocabulary emitted by the health-scoring engine.

These codes are the public contract with calling UIs, which translate them
into human language.  Values MUST remain stable across releases: add new
members, never rename or remove existing ones.
"""

from __future__ import annotations

from enum import Enum


class ReasonCode(str, Enum):
    """Root causes recorded while evaluating an inspection."""

    # ── Missing observations ─────────────────────────────────────────────
    DATA_MISSING_FRAME_COUNT = "DATA_MISSING_FRAME_COUNT"
    DATA_MISSING_BEE_FRAMES = "DATA_MISSING_BEE_FRAMES"
    DATA_MISSING_BROOD_FRAMES = "DATA_MISSING_BROOD_FRAMES"
    DATA_MISSING_LARVAE = "DATA_MISSING_LARVAE"
    DATA_MISSING_VARROA = "DATA_MISSING_VARROA"

    # ── Critical ─────────────────────────────────────────────────────────
    SICKNESS_SIGNS_REPORTED = "SICKNESS_SIGNS_REPORTED"
    QUEEN_FAILURE_SUSPECTED = "QUEEN_FAILURE_SUSPECTED"
    SWARM_RISK_IMMINENT = "SWARM_RISK_IMMINENT"
    VARROA_HIGH = "VARROA_HIGH"

    # ── Needs attention ──────────────────────────────────────────────────
    QUEEN_WEAK_OR_RECENTLY_LOST = "QUEEN_WEAK_OR_RECENTLY_LOST"
    QUEEN_CELLS_PRESENT = "QUEEN_CELLS_PRESENT"
    VARROA_MEDIUM = "VARROA_MEDIUM"
    FOOD_LOW = "FOOD_LOW"
    COLONY_WEAK = "COLONY_WEAK"
    BROOD_SMALL_BUT_VIABLE = "BROOD_SMALL_BUT_VIABLE"
    BROOD_QUALITY_LOW = "BROOD_QUALITY_LOW"

    # ── Informational ────────────────────────────────────────────────────
    VARROA_LOW = "VARROA_LOW"
    VARROA_NOT_CHECKED = "VARROA_NOT_CHECKED"
    FOOD_OK = "FOOD_OK"
    FOOD_HIGH = "FOOD_HIGH"
    BROOD_QUALITY_OK = "BROOD_QUALITY_OK"
    BROOD_QUALITY_HIGH = "BROOD_QUALITY_HIGH"
    INSPECTION_STABLE = "INSPECTION_STABLE"

    @property
    def is_missing_data(self) -> bool:
        return self.value.startswith("DATA_MISSING_")


class ActionCode(str, Enum):
    """Recommended follow-up actions for the beekeeper."""

    PHOTOGRAPH_SYMPTOMS = "PHOTOGRAPH_SYMPTOMS"
    ISOLATE_EQUIPMENT = "ISOLATE_EQUIPMENT"
    CONTACT_LAB = "CONTACT_LAB"

    CONFIRM_QUEEN_ABSENCE = "CONFIRM_QUEEN_ABSENCE"
    INSERT_TEST_FRAME = "INSERT_TEST_FRAME"
    PLAN_REQUEENING = "PLAN_REQUEENING"
    CHECK_QUEEN_NEXT_VISIT = "CHECK_QUEEN_NEXT_VISIT"
    LOOK_FOR_QUEEN_CELLS = "LOOK_FOR_QUEEN_CELLS"

    SPLIT_COLONY = "SPLIT_COLONY"
    ADD_SPACE = "ADD_SPACE"
    MONITOR_QUEEN_CELLS = "MONITOR_QUEEN_CELLS"

    TREAT_VARROA = "TREAT_VARROA"
    PLAN_VARROA_TREATMENT = "PLAN_VARROA_TREATMENT"
    CHECK_VARROA_NEXT_VISIT = "CHECK_VARROA_NEXT_VISIT"

    FEED_COLONY = "FEED_COLONY"
    REDUCE_HIVE_VOLUME = "REDUCE_HIVE_VOLUME"
    MONITOR_BROOD_GROWTH = "MONITOR_BROOD_GROWTH"
    INSPECT_BROOD_PATTERN = "INSPECT_BROOD_PATTERN"

    CONTINUE_WEEKLY_INSPECTIONS = "CONTINUE_WEEKLY_INSPECTIONS"
    KEEP_RECORDING_OBSERVATIONS = "KEEP_RECORDING_OBSERVATIONS"


class ChipCode(str, Enum):
    """Compact UI tags: one status chip plus prioritised reason chips."""

    # Status chips
    CHIP_STABLE = "CHIP_STABLE"
    CHIP_NEEDS_ATTENTION = "CHIP_NEEDS_ATTENTION"
    CHIP_URGENT = "CHIP_URGENT"
    CHIP_NO_DATA = "CHIP_NO_DATA"

    # Reason chips
    CHIP_SICKNESS = "CHIP_SICKNESS"
    CHIP_QUEEN_FAILURE = "CHIP_QUEEN_FAILURE"
    CHIP_SWARM_RISK = "CHIP_SWARM_RISK"
    CHIP_VARROA_HIGH = "CHIP_VARROA_HIGH"
    CHIP_FOOD_LOW = "CHIP_FOOD_LOW"
    CHIP_QUEEN_WEAK = "CHIP_QUEEN_WEAK"
    CHIP_VARROA_MEDIUM = "CHIP_VARROA_MEDIUM"
    CHIP_COLONY_WEAK = "CHIP_COLONY_WEAK"
    CHIP_BROOD_QUALITY_LOW = "CHIP_BROOD_QUALITY_LOW"
    CHIP_BROOD_SMALL = "CHIP_BROOD_SMALL"
    CHIP_VARROA_NOT_CHECKED = "CHIP_VARROA_NOT_CHECKED"


class HeadlineCode(str, Enum):
    """Single hive-level headline shown on dashboards."""

    HIVE_NO_INSPECTIONS = "HIVE_NO_INSPECTIONS"
    HIVE_STABLE = "HIVE_STABLE"
    HIVE_NEEDS_ATTENTION = "HIVE_NEEDS_ATTENTION"
    HIVE_URGENT = "HIVE_URGENT"
    HIVE_TREND_DECLINING = "HIVE_TREND_DECLINING"
