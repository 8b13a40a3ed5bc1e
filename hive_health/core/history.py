"""HistoryAggregator — rolls a hive's analysed inspections into a summary.

Input is always one hive's inspections, most recent first, each already
carrying its Analysis.  Nothing here re-evaluates a record.

Trend:
    diff = latest.score - previous.score
    - IMPROVING:  diff >  threshold
    - DECLINING:  diff < -threshold
    - STABLE:     everything else
    With fewer than two inspections there is no trend.

Next revisit:
    The earliest revisit_date on or after today among inspections that
    asked for a revisit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence, TypeVar

from hive_health.domain.analysis import Analysis
from hive_health.domain.codes import ChipCode, HeadlineCode
from hive_health.domain.enums import HealthStatus, Trend
from hive_health.domain.history import (
    AnalyzedInspection,
    HistoryEntry,
    HiveSmartBlock,
    HiveSummary,
    StatusCounters,
)
from hive_health.domain.inspection import InspectionRecord
from hive_health.foundation.clock import utc_today

logger = logging.getLogger(__name__)

_HEADLINES = {
    HealthStatus.RED: HeadlineCode.HIVE_URGENT,
    HealthStatus.YELLOW: HeadlineCode.HIVE_NEEDS_ATTENTION,
    HealthStatus.GREEN: HeadlineCode.HIVE_STABLE,
}

T = TypeVar("T", InspectionRecord, AnalyzedInspection)


@dataclass(frozen=True)
class TrendConfig:
    """Score difference beyond which two inspections are not 'stable'."""

    threshold: int = 5


def sort_history_desc(items: Iterable[T]) -> list[T]:
    """Order inspections most recent first.

    Ties on date fall back to inspection_id (higher first); items without
    an id keep their relative input order.
    """

    def key(item: T) -> tuple[date, int]:
        record = item.record if isinstance(item, AnalyzedInspection) else item
        return record.inspection_date, record.inspection_id or 0

    return sorted(items, key=key, reverse=True)


class HistoryAggregator:
    """Stateless aggregator over one hive's ordered inspection history."""

    def __init__(self, trend_config: TrendConfig | None = None) -> None:
        self._trend_config = trend_config or TrendConfig()

    # ── Public API ───────────────────────────────────────────────────────

    def classify_trend(self, latest_score: int, previous_score: int) -> Trend:
        diff = latest_score - previous_score
        threshold = self._trend_config.threshold
        if diff > threshold:
            return Trend.IMPROVING
        if diff < -threshold:
            return Trend.DECLINING
        return Trend.STABLE

    def annotate_history(self, analyzed_desc: Sequence[AnalyzedInspection]) -> list[HistoryEntry]:
        """Compare every inspection with the next-older one."""
        entries: list[HistoryEntry] = []
        for i, item in enumerate(analyzed_desc):
            trend = None
            delta = None
            if i + 1 < len(analyzed_desc):
                older = analyzed_desc[i + 1].analysis
                delta = item.analysis.score - older.score
                trend = self.classify_trend(item.analysis.score, older.score)
            entries.append(HistoryEntry(
                record=item.record,
                analysis=item.analysis,
                trend=trend,
                score_delta=delta,
            ))
        return entries

    def build_summary(
        self,
        analyzed_desc: Sequence[AnalyzedInspection],
        today: date | None = None,
    ) -> HiveSummary:
        """Summarise a hive's history (most recent first).

        Args:
            analyzed_desc: Analysed inspections sorted by date descending.
            today: Reference day for revisit selection; defaults to UTC today.
        """
        if not analyzed_desc:
            return empty_summary()

        today = today or utc_today()
        latest = analyzed_desc[0]
        latest_analysis: Analysis = latest.analysis

        trend = None
        if len(analyzed_desc) >= 2:
            trend = self.classify_trend(
                latest_analysis.score, analyzed_desc[1].analysis.score,
            )

        headline = _HEADLINES[latest_analysis.status]
        if trend is Trend.DECLINING and latest_analysis.status is not HealthStatus.RED:
            headline = HeadlineCode.HIVE_TREND_DECLINING

        summary = HiveSummary(
            has_data=True,
            latest_date=latest.record.inspection_date,
            latest_status=latest_analysis.status,
            latest_score=latest_analysis.score,
            latest_confidence=latest_analysis.confidence,
            trend=trend,
            counters=self._count_statuses(analyzed_desc),
            next_revisit_date=self._next_revisit(analyzed_desc, today),
            smart=HiveSmartBlock(
                headline_code=headline,
                chips=list(latest_analysis.chips),
                top_reasons=list(latest_analysis.smart_summary.top_reasons),
                top_actions=list(latest_analysis.smart_summary.top_actions),
            ),
        )

        logger.debug(
            "Summarised %d inspection(s) of hive %s: headline=%s trend=%s",
            len(analyzed_desc),
            latest.record.hive_id,
            headline.value,
            trend.value if trend else None,
        )
        return summary

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _count_statuses(analyzed: Sequence[AnalyzedInspection]) -> StatusCounters:
        counts = {status: 0 for status in HealthStatus}
        for item in analyzed:
            counts[item.analysis.status] += 1
        return StatusCounters(
            green=counts[HealthStatus.GREEN],
            yellow=counts[HealthStatus.YELLOW],
            red=counts[HealthStatus.RED],
        )

    @staticmethod
    def _next_revisit(analyzed: Sequence[AnalyzedInspection], today: date) -> date | None:
        upcoming = [
            item.record.revisit_date
            for item in analyzed
            if item.record.revisit_needed
            and item.record.revisit_date is not None
            and item.record.revisit_date >= today
        ]
        return min(upcoming) if upcoming else None


def empty_summary() -> HiveSummary:
    """Placeholder summary for a hive that has never been inspected."""
    return HiveSummary(
        has_data=False,
        counters=StatusCounters(),
        smart=HiveSmartBlock(
            headline_code=HeadlineCode.HIVE_NO_INSPECTIONS,
            chips=[ChipCode.CHIP_NO_DATA],
        ),
    )
