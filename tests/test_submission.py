from datetime import date
from itertools import count

import pytest

from productivity_dashboard.errors import ValidationError
from productivity_dashboard.schema import Department, TaskCategory, TaskStatus
from productivity_dashboard.submission import DailyLogSubmission, TaskItem, split_submission, validate_submission


def make_submission(**overrides):
    values = {
        "employee_name": "Amina Yusuf",
        "employee_id": "E101",
        "department": Department.IT,
        "date": date(2025, 1, 6),
        "hours": 8.0,
        "productivity_rating": 4,
        "blockers": "Slow VPN",
        "tasks_carried_over": "Finish imaging",
        "tasks": (
            TaskItem("Patch mail server", TaskCategory.IT, TaskStatus.COMPLETE),
            TaskItem("Uptime report", TaskCategory.REPORTING, TaskStatus.COMPLETE),
            TaskItem("Laptop imaging", TaskCategory.IT, TaskStatus.IN_PROGRESS),
            TaskItem("Asset register", TaskCategory.ADMIN, TaskStatus.INCOMPLETE),
        ),
    }
    values.update(overrides)
    return DailyLogSubmission(**values)


def test_split_shares_hours_equally():
    logs = split_submission(make_submission())
    assert len(logs) == 4
    assert all(log.hours == 2.0 for log in logs)
    assert [log.task_description for log in logs][0] == "Patch mail server"


def test_split_copies_shared_fields():
    ids = count(1)
    logs = split_submission(make_submission(), id_factory=lambda: f"log-{next(ids)}")
    assert [log.id for log in logs] == ["log-1", "log-2", "log-3", "log-4"]
    for log in logs:
        assert log.employee_name == "Amina Yusuf"
        assert log.employee_id == "E101"
        assert log.department is Department.IT
        assert log.date == date(2025, 1, 6)
        assert log.productivity_rating == 4
        assert log.blockers == "Slow VPN"
        assert log.tasks_carried_over == "Finish imaging"


def test_split_without_tasks_yields_nothing():
    assert split_submission(make_submission(tasks=())) == []


def test_split_assigns_unique_default_ids():
    logs = split_submission(make_submission())
    assert len({log.id for log in logs}) == 4


def test_validate_accepts_complete_submission():
    validate_submission(make_submission())
    validate_submission(make_submission(hours=0.0))


@pytest.mark.parametrize(
    "overrides",
    [
        {"employee_name": "  "},
        {"employee_id": ""},
        {"department": None},
        {"hours": None},
        {"productivity_rating": None},
    ],
)
def test_validate_rejects_missing_required_fields(overrides):
    with pytest.raises(ValidationError, match="required fields"):
        validate_submission(make_submission(**overrides))


def test_validate_rejects_out_of_range_values():
    with pytest.raises(ValidationError):
        validate_submission(make_submission(hours=25.0))
    with pytest.raises(ValidationError):
        validate_submission(make_submission(hours=-1.0))
    with pytest.raises(ValidationError):
        validate_submission(make_submission(productivity_rating=6))


def test_validate_rejects_blank_task_description():
    tasks = (TaskItem("Patch mail server"), TaskItem("   "))
    with pytest.raises(ValidationError, match="descriptions"):
        validate_submission(make_submission(tasks=tasks))


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)
