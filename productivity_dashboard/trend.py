"""Rolling daily task counts."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from productivity_dashboard.schema import ProductivityLog, TaskStatus


@dataclass(frozen=True)
class DailyTrendPoint:
    date: date
    total_tasks: int
    completed_tasks: int

    @property
    def label(self) -> str:
        return f"{self.date:%b} {self.date.day}"


def daily_trend(logs: Sequence[ProductivityLog], today: Optional[date] = None, days: int = 7) -> list[DailyTrendPoint]:
    """Task counts for the ``days`` calendar days ending ``today``, oldest first."""

    today = today or date.today()
    totals = Counter(log.date for log in logs)
    completed = Counter(log.date for log in logs if log.task_status is TaskStatus.COMPLETE)

    points = []
    for offset in range(days):
        day = today - timedelta(days=offset)
        points.append(DailyTrendPoint(date=day, total_tasks=totals[day], completed_tasks=completed[day]))
    return list(reversed(points))
