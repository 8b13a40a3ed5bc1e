from hive_health.domain.analysis import Analysis, InspectionMetrics, SmartSummary
from hive_health.domain.history import (
    AnalyzedInspection,
    HistoryEntry,
    HiveHealthReport,
    HiveSmartBlock,
    HiveSummary,
    StatusCounters,
)
from hive_health.domain.inspection import InspectionRecord

__all__ = [
    "Analysis",
    "AnalyzedInspection",
    "HistoryEntry",
    "HiveHealthReport",
    "HiveSmartBlock",
    "HiveSummary",
    "InspectionMetrics",
    "InspectionRecord",
    "SmartSummary",
    "StatusCounters",
]
