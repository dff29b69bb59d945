"""Daily log submissions and their expansion into task-level logs."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from productivity_dashboard.errors import ValidationError
from productivity_dashboard.schema import Department, ProductivityLog, TaskCategory, TaskStatus

MAX_HOURS_PER_DAY = 24.0


@dataclass(frozen=True)
class TaskItem:
    task_description: str
    task_category: TaskCategory = TaskCategory.ADMIN
    task_status: TaskStatus = TaskStatus.IN_PROGRESS


@dataclass(frozen=True)
class DailyLogSubmission:
    """One daily form-fill: shared metadata plus the tasks worked on."""

    employee_name: str
    employee_id: str
    department: Optional[Department]
    date: date
    hours: Optional[float]
    productivity_rating: Optional[int]
    blockers: str = ""
    tasks_carried_over: Optional[str] = None
    tasks: tuple[TaskItem, ...] = ()


def validate_submission(submission: DailyLogSubmission) -> None:
    """Reject a submission before anything reaches the store."""

    missing = []
    if not submission.employee_name.strip():
        missing.append("employee_name")
    if not submission.employee_id.strip():
        missing.append("employee_id")
    if submission.department is None:
        missing.append("department")
    if submission.hours is None:
        missing.append("hours")
    if submission.productivity_rating is None:
        missing.append("productivity_rating")
    if missing:
        raise ValidationError(f"Please fill in all required fields: {missing}")

    if not 0 <= submission.hours <= MAX_HOURS_PER_DAY:
        raise ValidationError(f"hours must be between 0 and {MAX_HOURS_PER_DAY:g}")
    if not 1 <= submission.productivity_rating <= 5:
        raise ValidationError("productivity_rating must be between 1 and 5")

    blank = [index for index, task in enumerate(submission.tasks, start=1) if not task.task_description.strip()]
    if blank:
        raise ValidationError(f"Please provide descriptions for all tasks (tasks {blank})")


def split_submission(
    submission: DailyLogSubmission,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> list[ProductivityLog]:
    """Expand a submission into one log per task with an equal share of hours."""

    tasks = submission.tasks
    hours_per_task = (submission.hours or 0.0) / len(tasks) if tasks else 0.0

    return [
        ProductivityLog(
            id=id_factory(),
            employee_name=submission.employee_name.strip(),
            employee_id=submission.employee_id.strip(),
            department=submission.department,
            date=submission.date,
            task_category=task.task_category,
            task_description=task.task_description.strip(),
            task_status=task.task_status,
            hours=hours_per_task,
            productivity_rating=int(submission.productivity_rating or 0),
            blockers=submission.blockers,
            tasks_carried_over=submission.tasks_carried_over,
        )
        for task in tasks
    ]
