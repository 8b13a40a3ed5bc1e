"""InspectionEvaluator — deterministic health verdict for one inspection.

Design principles:
    1. Pure function: accepts an InspectionRecord, returns an Analysis.
    2. No side effects, no state mutation, no I/O.
    3. Never raises on incomplete input: blanks become DATA_MISSING_*
       reasons and lower the confidence instead.
    4. Rule order is data (``hive_health.core.rules.RULES``), not control flow.

Pipeline:
    record ─▶ normalize ─▶ run_rules ─▶ score / confidence / chips ─▶ Analysis
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hive_health.core.normalize import normalize
from hive_health.core.rules import RULES, ROUTINE_REVISIT_DAYS, Rule, run_rules
from hive_health.core.scoring import MIN_CONFIDENCE, build_chips, compute_confidence, compute_score
from hive_health.domain.analysis import Analysis, InspectionMetrics, SmartSummary
from hive_health.domain.inspection import InspectionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluatorConfig:
    """Tunable presentation and confidence parameters.

    Revisit days stay within [1, 7] and the confidence floor within
    [0.35, 1.0]; these can only be tightened.

    Raises:
        ValueError: If a parameter falls outside its allowed range.
    """

    default_revisit_days: int = ROUTINE_REVISIT_DAYS
    confidence_missing_penalty: float = 0.12
    confidence_floor: float = MIN_CONFIDENCE
    max_chips: int = 5
    smart_top_n: int = 3

    def __post_init__(self) -> None:
        if not 1 <= self.default_revisit_days <= ROUTINE_REVISIT_DAYS:
            raise ValueError(
                f"default_revisit_days must be within 1..{ROUTINE_REVISIT_DAYS}, "
                f"got {self.default_revisit_days}"
            )
        if self.confidence_missing_penalty < 0:
            raise ValueError(
                f"confidence_missing_penalty must be >= 0, got {self.confidence_missing_penalty}"
            )
        if not MIN_CONFIDENCE <= self.confidence_floor <= 1.0:
            raise ValueError(
                f"confidence_floor must be within {MIN_CONFIDENCE}..1.0, "
                f"got {self.confidence_floor}"
            )
        if self.max_chips < 1 or self.smart_top_n < 0:
            raise ValueError("max_chips must be >= 1 and smart_top_n >= 0")


class InspectionEvaluator:
    """Stateless evaluator: the same record always yields the same Analysis."""

    def __init__(
        self,
        config: EvaluatorConfig | None = None,
        rules: tuple[Rule, ...] = RULES,
    ) -> None:
        self._config = config or EvaluatorConfig()
        self._rules = rules

    # ── Public API ───────────────────────────────────────────────────────

    def evaluate(
        self,
        record: InspectionRecord,
        frame_capacity: int | None = None,
    ) -> Analysis:
        """Produce the health verdict for *record*.

        Args:
            record: A validated inspection.
            frame_capacity: Total frames the hive holds; used as the ratio
                denominator when the inspector did not count frames.
        """
        cfg = self._config
        insp = normalize(record, frame_capacity)
        verdict = run_rules(insp, self._rules, default_revisit_days=cfg.default_revisit_days)

        reasons = verdict.reason_codes
        actions = verdict.action_codes

        analysis = Analysis(
            status=verdict.status,
            score=compute_score(verdict.status, reasons),
            confidence=compute_confidence(
                reasons,
                missing_penalty=cfg.confidence_missing_penalty,
                floor=cfg.confidence_floor,
            ),
            reason_codes=reasons,
            action_codes=actions,
            metrics=InspectionMetrics(
                bee_ratio=insp.bee_ratio,
                brood_ratio=insp.brood_ratio,
                frame_count=record.frame_count,
                bee_frames=insp.bee_frames,
                brood_frames=insp.brood_frames,
            ),
            suggested_revisit_days=verdict.revisit_days,
            chips=build_chips(verdict.status, reasons, max_chips=cfg.max_chips),
            smart_summary=SmartSummary(
                top_reasons=reasons[: cfg.smart_top_n],
                top_actions=actions[: cfg.smart_top_n],
            ),
        )

        logger.debug(
            "Evaluated inspection %s of hive %s: status=%s score=%d confidence=%.2f",
            record.inspection_id,
            record.hive_id,
            analysis.status.value,
            analysis.score,
            analysis.confidence,
        )
        return analysis


def evaluate_inspection(
    record: InspectionRecord,
    frame_capacity: int | None = None,
) -> Analysis:
    """Evaluate *record* with the default configuration."""
    return _DEFAULT_EVALUATOR.evaluate(record, frame_capacity)


_DEFAULT_EVALUATOR = InspectionEvaluator()
