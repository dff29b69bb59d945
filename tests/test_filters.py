from datetime import date, datetime

from productivity_dashboard.filters import LogFilter, apply_filters
from productivity_dashboard.schema import Department, ProductivityLog, TaskCategory, TaskStatus


def make_log(log_id, employee, department, day):
    return ProductivityLog(
        id=log_id,
        employee_name=employee,
        employee_id="E1",
        department=department,
        date=day,
        task_category=TaskCategory.ADMIN,
        task_description="Task",
        task_status=TaskStatus.COMPLETE,
        hours=2.0,
        productivity_rating=3,
    )


def sample_logs():
    return [
        make_log("a", "Amina", Department.IT, date(2025, 1, 1)),
        make_log("b", "Tunde", Department.PROCUREMENT, date(2025, 1, 2)),
        make_log("c", "Amina", Department.IT, date(2025, 1, 3)),
        make_log("d", "Grace", Department.ACCOUNTS_FINANCE, date(2025, 1, 4)),
    ]


def ids(logs):
    return sorted(log.id for log in logs)


def test_no_filter_returns_everything():
    assert ids(apply_filters(sample_logs())) == ["a", "b", "c", "d"]
    assert ids(apply_filters(sample_logs(), LogFilter())) == ["a", "b", "c", "d"]
    assert LogFilter().is_empty


def test_date_bounds_are_inclusive():
    log_filter = LogFilter(date_start=date(2025, 1, 2), date_end=date(2025, 1, 3))
    assert ids(apply_filters(sample_logs(), log_filter)) == ["b", "c"]


def test_department_and_employee():
    assert ids(apply_filters(sample_logs(), LogFilter(department=Department.IT))) == ["a", "c"]
    assert ids(apply_filters(sample_logs(), LogFilter(employee="Grace"))) == ["d"]
    combined = LogFilter(department=Department.IT, employee="Tunde")
    assert apply_filters(sample_logs(), combined) == []
    assert not combined.is_empty


def test_datetime_rows_are_filtered_by_calendar_day():
    record = {
        "id": "e",
        "employee_name": "Amina",
        "department": "IT",
        "date": datetime(2025, 1, 3, 9, 30),
        "task_category": "Admin",
        "task_status": "Complete",
        "hours": 1,
    }
    log = ProductivityLog.from_record(record)
    assert type(log.date) is date
    assert log.date == date(2025, 1, 3)

    window = LogFilter(date_start=date(2025, 1, 3), date_end=date(2025, 1, 3))
    assert ids(apply_filters([*sample_logs(), log], window)) == ["c", "e"]
