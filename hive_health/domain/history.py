"""History domain models — per-hive rollups of analysed inspections.

A HiveSummary is a pure projection of an ordered inspection history.  It
has no identity of its own and is recomputed on every request.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from hive_health.domain.analysis import Analysis
from hive_health.domain.codes import ActionCode, ChipCode, HeadlineCode, ReasonCode
from hive_health.domain.enums import HealthStatus, Trend
from hive_health.domain.inspection import InspectionRecord


class AnalyzedInspection(BaseModel):
    """An inspection paired with its freshly computed Analysis."""

    record: InspectionRecord
    analysis: Analysis

    model_config = {"frozen": True}


class HistoryEntry(BaseModel):
    """An analysed inspection annotated against the next-older inspection.

    ``trend`` and ``score_delta`` are None for the oldest entry, which has
    no reference point.
    """

    record: InspectionRecord
    analysis: Analysis
    trend: Trend | None = None
    score_delta: int | None = None

    model_config = {"frozen": True}


class StatusCounters(BaseModel):
    green: int = Field(0, ge=0)
    yellow: int = Field(0, ge=0)
    red: int = Field(0, ge=0)

    model_config = {"frozen": True}


class HiveSmartBlock(BaseModel):
    """Dashboard headline plus the latest inspection's chips and top codes."""

    headline_code: HeadlineCode
    chips: list[ChipCode] = Field(default_factory=list)
    top_reasons: list[ReasonCode] = Field(default_factory=list)
    top_actions: list[ActionCode] = Field(default_factory=list)

    model_config = {"frozen": True}


class HiveSummary(BaseModel):
    """Hive-level rollup of an inspection history (most recent first)."""

    has_data: bool
    latest_date: date | None = None
    latest_status: HealthStatus | None = None
    latest_score: int | None = None
    latest_confidence: float | None = None
    trend: Trend | None = None
    counters: StatusCounters = Field(default_factory=StatusCounters)
    next_revisit_date: date | None = None
    smart: HiveSmartBlock

    model_config = {"frozen": True}


class HiveHealthReport(BaseModel):
    """Full history rendering for one hive: annotated entries plus summary."""

    hive_id: int | None = None
    inspections: list[HistoryEntry] = Field(default_factory=list)
    summary: HiveSummary

    model_config = {"frozen": True}
