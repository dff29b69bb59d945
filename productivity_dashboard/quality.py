"""Data quality scoring for submitted logs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from productivity_dashboard.schema import ProductivityLog


@dataclass(frozen=True)
class DataQualityScore:
    form_completeness_score: float
    missing_time_entries: float


def is_complete(log: ProductivityLog) -> bool:
    return bool(
        log.employee_name
        and log.employee_id
        and log.task_description
        and log.hours > 0
        and log.productivity_rating > 0
    )


def data_quality(logs: Sequence[ProductivityLog]) -> DataQualityScore:
    """Share of fully filled logs and share of logs without time recorded.

    An empty set scores 100% complete with 0% missing time.
    """

    total = len(logs)
    if not total:
        return DataQualityScore(form_completeness_score=100.0, missing_time_entries=0.0)

    complete = sum(1 for log in logs if is_complete(log))
    missing_time = sum(1 for log in logs if log.hours <= 0)
    return DataQualityScore(
        form_completeness_score=complete / total * 100.0,
        missing_time_entries=missing_time / total * 100.0,
    )
