"""KPI aggregation over productivity logs."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

from productivity_dashboard.filters import LogFilter, apply_filters
from productivity_dashboard.quality import DataQualityScore, data_quality
from productivity_dashboard.schema import Department, ProductivityLog, TaskStatus
from productivity_dashboard.trend import DailyTrendPoint, daily_trend

WORK_HOURS_PER_DAY = 8
LEADERBOARD_SIZE = 10
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class ExecutiveSummary:
    total_tasks: int
    completed_tasks: int
    completion_rate: float
    total_hours: float
    avg_task_duration: float
    top_performing_dept: str
    least_performing_dept: str
    overall_utilization_rate: float


@dataclass(frozen=True)
class DepartmentPerformance:
    department: Department
    total_tasks: int
    completion_rate: float
    avg_task_duration: float
    utilization_rate: float


@dataclass(frozen=True)
class EmployeeLeaderboardEntry:
    name: str
    completed_tasks: int
    avg_task_duration: float
    utilization_rate: float


@dataclass(frozen=True)
class MetricsBundle:
    """Everything the dashboard renders for one filter selection."""

    executive_summary: ExecutiveSummary
    employee_leaderboard: list[EmployeeLeaderboardEntry]
    department_performance: list[DepartmentPerformance]
    daily_trend: list[DailyTrendPoint]
    status_distribution: dict[TaskStatus, int]
    data_quality: DataQualityScore
    filtered_logs: list[ProductivityLog] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "executive_summary": asdict(self.executive_summary),
            "employee_leaderboard": [asdict(entry) for entry in self.employee_leaderboard],
            "department_performance": [
                {**asdict(entry), "department": entry.department.value} for entry in self.department_performance
            ],
            "daily_trend": [
                {
                    "date": point.date.isoformat(),
                    "label": point.label,
                    "total_tasks": point.total_tasks,
                    "completed_tasks": point.completed_tasks,
                }
                for point in self.daily_trend
            ],
            "status_distribution": {status.value: count for status, count in self.status_distribution.items()},
            "data_quality": asdict(self.data_quality),
        }


def _pct(part: float, whole: float) -> float:
    return part / whole * 100.0 if whole else 0.0


def _completed(logs: Sequence[ProductivityLog]) -> int:
    return sum(1 for log in logs if log.task_status is TaskStatus.COMPLETE)


def compute_utilization(logs: Sequence[ProductivityLog]) -> float:
    """Logged hours as a percentage of (distinct workdays per employee) x 8h."""

    total_hours = sum(log.hours for log in logs)
    work_days: dict[str, set[date]] = defaultdict(set)
    for log in logs:
        work_days[log.employee_name].add(log.date)

    available_hours = sum(len(days) for days in work_days.values()) * WORK_HOURS_PER_DAY
    return _pct(total_hours, available_hours)


def department_performance(logs: Sequence[ProductivityLog]) -> list[DepartmentPerformance]:
    """Per-department rollup, best completion rate first; empty departments dropped."""

    by_department: dict[Department, list[ProductivityLog]] = defaultdict(list)
    for log in logs:
        by_department[log.department].append(log)

    rows = []
    for department in Department:
        scoped = by_department.get(department, [])
        total = len(scoped)
        rows.append(
            DepartmentPerformance(
                department=department,
                total_tasks=total,
                completion_rate=_pct(_completed(scoped), total),
                avg_task_duration=sum(log.hours for log in scoped) / total if total else 0.0,
                utilization_rate=compute_utilization(scoped),
            )
        )

    active = [row for row in rows if row.total_tasks > 0]
    return sorted(active, key=lambda row: row.completion_rate, reverse=True)


def employee_leaderboard(logs: Sequence[ProductivityLog], limit: int = LEADERBOARD_SIZE) -> list[EmployeeLeaderboardEntry]:
    """Top employees by completed tasks."""

    by_employee: dict[str, list[ProductivityLog]] = defaultdict(list)
    for log in logs:
        by_employee[log.employee_name].append(log)

    entries = [
        EmployeeLeaderboardEntry(
            name=name,
            completed_tasks=_completed(scoped),
            avg_task_duration=sum(log.hours for log in scoped) / len(scoped),
            utilization_rate=compute_utilization(scoped),
        )
        for name, scoped in by_employee.items()
    ]
    entries.sort(key=lambda entry: entry.completed_tasks, reverse=True)
    return entries[:limit]


def status_distribution(logs: Sequence[ProductivityLog]) -> dict[TaskStatus, int]:
    counts = {status: 0 for status in TaskStatus}
    for log in logs:
        counts[log.task_status] += 1
    return counts


def build_executive_summary(
    logs: Sequence[ProductivityLog],
    departments: Optional[list[DepartmentPerformance]] = None,
) -> ExecutiveSummary:
    """Headline KPIs; pass ``departments`` to reuse an existing rollup."""

    if departments is None:
        departments = department_performance(logs)

    total_tasks = len(logs)
    completed_tasks = _completed(logs)
    total_hours = sum(log.hours for log in logs)

    return ExecutiveSummary(
        total_tasks=total_tasks,
        completed_tasks=completed_tasks,
        completion_rate=_pct(completed_tasks, total_tasks),
        total_hours=total_hours,
        avg_task_duration=total_hours / total_tasks if total_tasks else 0.0,
        top_performing_dept=departments[0].department.value if departments else NOT_AVAILABLE,
        least_performing_dept=departments[-1].department.value if departments else NOT_AVAILABLE,
        overall_utilization_rate=compute_utilization(logs),
    )


def compute_metrics(
    all_logs: Sequence[ProductivityLog],
    log_filter: Optional[LogFilter] = None,
    today: Optional[date] = None,
) -> MetricsBundle:
    """Filter the snapshot and derive every dashboard metric from it.

    The filtered logs are kept on the bundle as ``filtered_logs`` and are left
    out of ``to_dict``.

    The 7-day trend is computed from ``all_logs``, so the active filters do not
    apply to it.
    """

    snapshot = tuple(all_logs)
    filtered = apply_filters(snapshot, log_filter)
    departments = department_performance(filtered)

    return MetricsBundle(
        executive_summary=build_executive_summary(filtered, departments),
        employee_leaderboard=employee_leaderboard(filtered),
        department_performance=departments,
        daily_trend=daily_trend(snapshot, today=today),
        status_distribution=status_distribution(filtered),
        data_quality=data_quality(filtered),
        filtered_logs=filtered,
    )
