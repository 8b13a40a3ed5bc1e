"""Ingestion boundary — raw payloads in, validated InspectionRecords out.

Architectural rules:
    1. The raw payload dict is never mutated.
    2. Anything that violates the frame invariants is rejected here, so the
       engine never sees it.
    3. Only validation lives here, no scoring logic.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from hive_health.domain.inspection import InspectionRecord

logger = logging.getLogger(__name__)


class InspectionRejectedError(Exception):
    """Raised when a raw inspection payload fails validation."""

    def __init__(self, reason: str, index: int | None = None) -> None:
        self.reason = reason
        self.index = index
        where = f" at index {index}" if index is not None else ""
        super().__init__(f"Inspection rejected{where}: {reason}")


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_inspection(raw: dict[str, Any]) -> InspectionRecord:
    """Validate *raw* into an InspectionRecord.

    Raises:
        InspectionRejectedError: If the payload is malformed or breaks the
            frame invariants.
    """
    try:
        return InspectionRecord.model_validate(dict(raw))
    except ValidationError as exc:
        reason = _describe(exc)
        logger.warning("Rejected inspection for hive %s: %s", raw.get("hive_id"), reason)
        raise InspectionRejectedError(reason) from exc


def parse_inspections(raws: Iterable[dict[str, Any]]) -> list[InspectionRecord]:
    """Validate a batch, failing on the first rejected payload."""
    records = []
    for index, raw in enumerate(raws):
        try:
            records.append(parse_inspection(raw))
        except InspectionRejectedError as exc:
            raise InspectionRejectedError(exc.reason, index=index) from exc
    return records
