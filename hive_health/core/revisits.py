"""Revisit alerts — which scheduled follow-up inspections are due.

Selects inspections that asked for a revisit and carry a date, filtered
relative to today and ordered by revisit date (earliest first).
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from hive_health.domain.enums import RevisitFilter
from hive_health.domain.inspection import InspectionRecord
from hive_health.foundation.clock import utc_today


def _matches(revisit: date, window: RevisitFilter, today: date) -> bool:
    if window is RevisitFilter.TODAY:
        return revisit == today
    if window is RevisitFilter.OVERDUE:
        return revisit < today
    if window is RevisitFilter.UPCOMING:
        return revisit > today
    return True


def filter_revisit_alerts(
    records: Iterable[InspectionRecord],
    window: RevisitFilter | str = RevisitFilter.TODAY,
    today: date | None = None,
) -> list[InspectionRecord]:
    """Return revisit-needed inspections whose date falls in *window*.

    Raises:
        ValueError: If *window* is not a known RevisitFilter value.
    """
    window = RevisitFilter(window)
    today = today or utc_today()
    due = [
        r for r in records
        if r.revisit_needed
        and r.revisit_date is not None
        and _matches(r.revisit_date, window, today)
    ]
    return sorted(due, key=lambda r: r.revisit_date)
