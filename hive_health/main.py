"""hive-health — Inspection Health-Scoring Engine.

This is the application entry point.  It wires the InspectionEvaluator,
HistoryAggregator and HiveHealthService into a stateless HTTP surface.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from hive_health.api.inspections import create_inspection_router
from hive_health.config import settings
from hive_health.core.evaluator import EvaluatorConfig, InspectionEvaluator
from hive_health.core.history import HistoryAggregator, TrendConfig
from hive_health.services.hive_report import HiveHealthService

__version__ = "0.1.0"

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Engine ───────────────────────────────────────────────────────────────────

evaluator = InspectionEvaluator(
    config=EvaluatorConfig(
        default_revisit_days=settings.default_revisit_days,
        confidence_missing_penalty=settings.confidence_missing_penalty,
        confidence_floor=settings.confidence_floor,
        max_chips=settings.max_chips,
        smart_top_n=settings.smart_top_n,
    ),
)

aggregator = HistoryAggregator(
    trend_config=TrendConfig(threshold=settings.trend_threshold),
)

service = HiveHealthService(evaluator=evaluator, aggregator=aggregator)

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Hive inspection health scoring and history summaries",
    version=__version__,
    debug=settings.debug,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_inspection_router(service))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "app": settings.app_name, "version": __version__}
