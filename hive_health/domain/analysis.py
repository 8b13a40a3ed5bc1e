"""Analysis — the derived health verdict of one inspection.

An Analysis is never persisted.  It is recomputed from its InspectionRecord
whenever requested, so there is nothing here that can go stale.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from hive_health.domain.codes import ActionCode, ChipCode, ReasonCode
from hive_health.domain.enums import HealthStatus


class InspectionMetrics(BaseModel):
    """Frame counts and occupancy ratios used by the strength heuristics."""

    bee_ratio: float | None = Field(None, description="bee_frames / frame_count, if both known")
    brood_ratio: float | None = Field(None, description="brood_frames / frame_count, if both known")
    frame_count: int | None = None
    bee_frames: int | None = None
    brood_frames: int | None = None

    model_config = {"frozen": True}


class SmartSummary(BaseModel):
    """The first few reasons and actions, in evaluation order."""

    top_reasons: list[ReasonCode] = Field(default_factory=list)
    top_actions: list[ActionCode] = Field(default_factory=list)

    model_config = {"frozen": True}


class Analysis(BaseModel):
    """Immutable health verdict for a single inspection.

    ``score`` always agrees with ``status``: red ≤ 49, yellow ≤ 79,
    green ≥ 80.  ``reason_codes`` and ``action_codes`` are ordered by
    evaluation and never empty.
    """

    status: HealthStatus
    score: int = Field(..., ge=0, le=100)
    confidence: float = Field(..., ge=0.0, le=1.0)
    reason_codes: list[ReasonCode] = Field(..., min_length=1)
    action_codes: list[ActionCode] = Field(..., min_length=1)
    metrics: InspectionMetrics
    suggested_revisit_days: int = Field(..., ge=0)
    chips: list[ChipCode] = Field(..., min_length=1)
    smart_summary: SmartSummary

    model_config = {"frozen": True}
