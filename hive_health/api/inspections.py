"""REST endpoints for inspection health analysis.

Paths:
    POST /api/inspections/analyze      one record → Analysis
    POST /api/hives/{hive_id}/report   a hive's records → annotated history + summary
    POST /api/inspections/revisits     records → revisit alerts for a window

Stateless: every request carries the already-fetched records and nothing
is stored.  Records are validated by the InspectionRecord model, so
payloads breaking the frame invariants are answered with 422 before the
engine runs.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from hive_health.core.revisits import filter_revisit_alerts
from hive_health.domain.enums import RevisitFilter
from hive_health.domain.inspection import InspectionRecord
from hive_health.services.hive_report import HiveHealthService, MixedHiveError

logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    record: InspectionRecord
    frame_capacity: int | None = Field(default=None, ge=0)


class HiveReportRequest(BaseModel):
    inspections: list[InspectionRecord] = Field(default_factory=list)
    frame_capacity: int | None = Field(default=None, ge=0)
    today: date | None = None


class RevisitRequest(BaseModel):
    inspections: list[InspectionRecord] = Field(default_factory=list)
    today: date | None = None


def create_inspection_router(service: HiveHealthService) -> APIRouter:
    """Factory that wires the inspection endpoints to a HiveHealthService."""

    router = APIRouter(prefix="/api", tags=["inspections"])

    @router.post("/inspections/analyze")
    async def analyze_inspection(body: AnalyzeRequest) -> dict[str, Any]:
        analysis = service.analyze_inspection(body.record, body.frame_capacity)
        return analysis.model_dump(mode="json")

    @router.post("/hives/{hive_id}/report")
    async def hive_report(hive_id: int, body: HiveReportRequest) -> dict[str, Any]:
        foreign = sorted({r.hive_id for r in body.inspections if r.hive_id != hive_id})
        if foreign:
            raise HTTPException(
                status_code=400,
                detail=f"Inspections belong to other hives: {foreign}",
            )
        try:
            report = service.analyze_hive(
                body.inspections,
                frame_capacity=body.frame_capacity,
                today=body.today,
            )
        except MixedHiveError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        payload = report.model_dump(mode="json")
        payload["hive_id"] = hive_id
        return payload

    @router.post("/inspections/revisits")
    async def revisit_alerts(
        body: RevisitRequest,
        window_name: str = Query("today", alias="filter"),
    ) -> dict[str, Any]:
        try:
            window = RevisitFilter(window_name)
        except ValueError as exc:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown filter '{window_name}'; expected one of "
                       f"{[f.value for f in RevisitFilter]}",
            ) from exc

        alerts = filter_revisit_alerts(body.inspections, window, today=body.today)
        logger.debug("Revisit filter %s matched %d inspection(s)", window.value, len(alerts))
        return {
            "filter": window.value,
            "alerts": [a.model_dump(mode="json") for a in alerts],
            "count": len(alerts),
        }

    return router
