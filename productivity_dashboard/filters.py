"""Global dashboard filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from productivity_dashboard.schema import Department, ProductivityLog


@dataclass(frozen=True)
class LogFilter:
    """Unset fields impose no constraint."""

    date_start: Optional[date] = None
    date_end: Optional[date] = None
    department: Optional[Department] = None
    employee: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self == LogFilter()


def matches(log: ProductivityLog, log_filter: LogFilter) -> bool:
    if log_filter.date_start and log.date < log_filter.date_start:
        return False
    if log_filter.date_end and log.date > log_filter.date_end:
        return False
    if log_filter.department and log.department != log_filter.department:
        return False
    if log_filter.employee and log.employee_name != log_filter.employee:
        return False
    return True


def apply_filters(logs: Iterable[ProductivityLog], log_filter: Optional[LogFilter] = None) -> list[ProductivityLog]:
    """Return the logs satisfying every set field of ``log_filter``."""

    if log_filter is None:
        return list(logs)
    return [log for log in logs if matches(log, log_filter)]
