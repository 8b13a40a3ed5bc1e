"""HiveHealthService — evaluate a hive's inspections and roll them up.

Wires the InspectionEvaluator and HistoryAggregator together for callers
that hold raw records rather than pre-analysed ones.  Holds no state
between calls: every report is recomputed from the records given.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from hive_health.core.evaluator import InspectionEvaluator
from hive_health.core.history import HistoryAggregator, sort_history_desc
from hive_health.domain.analysis import Analysis
from hive_health.domain.history import AnalyzedInspection, HiveHealthReport
from hive_health.domain.inspection import InspectionRecord

logger = logging.getLogger(__name__)


class MixedHiveError(ValueError):
    """Raised when a history contains inspections of more than one hive."""


class HiveHealthService:
    def __init__(
        self,
        evaluator: InspectionEvaluator | None = None,
        aggregator: HistoryAggregator | None = None,
    ) -> None:
        self._evaluator = evaluator or InspectionEvaluator()
        self._aggregator = aggregator or HistoryAggregator()

    def analyze_inspection(
        self,
        record: InspectionRecord,
        frame_capacity: int | None = None,
    ) -> Analysis:
        return self._evaluator.evaluate(record, frame_capacity)

    def analyze_hive(
        self,
        records: Iterable[InspectionRecord],
        frame_capacity: int | None = None,
        today: date | None = None,
    ) -> HiveHealthReport:
        """Build the full history report for one hive.

        Records may arrive in any order; they are sorted most recent first.

        Raises:
            MixedHiveError: If the records belong to different hives.
        """
        ordered = sort_history_desc(records)
        hive_ids = {r.hive_id for r in ordered}
        if len(hive_ids) > 1:
            raise MixedHiveError(f"Inspections span several hives: {sorted(hive_ids)}")

        analyzed = [
            AnalyzedInspection(record=r, analysis=self._evaluator.evaluate(r, frame_capacity))
            for r in ordered
        ]
        report = HiveHealthReport(
            hive_id=ordered[0].hive_id if ordered else None,
            inspections=self._aggregator.annotate_history(analyzed),
            summary=self._aggregator.build_summary(analyzed, today=today),
        )
        logger.info(
            "Built health report for hive %s from %d inspection(s)",
            report.hive_id,
            len(analyzed),
        )
        return report
