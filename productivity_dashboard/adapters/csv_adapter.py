"""CSV adapter for productivity logs."""

from __future__ import annotations

import csv
from datetime import date
from typing import Iterable, Optional

from productivity_dashboard.schema import ProductivityLog

EXPORT_HEADERS = ["Date", "Employee", "ID", "Department", "Task", "Status", "Hours"]


def _parse_row(row: dict, row_number: int) -> ProductivityLog:
    try:
        return ProductivityLog.from_record(row)
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: {exc}") from exc


def parse(file_path: str) -> list[ProductivityLog]:
    """Parse a CSV file with snake_case storage columns into logs."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        logs: list[ProductivityLog] = []
        for row_number, row in enumerate(reader, start=2):
            logs.append(_parse_row(row, row_number))
        return logs


def export_csv(logs: Iterable[ProductivityLog]) -> str:
    """Render the dashboard export.

    Values are joined with bare commas; a comma inside a field is not quoted.
    """

    rows = [EXPORT_HEADERS]
    for log in logs:
        rows.append(
            [
                log.date.isoformat(),
                log.employee_name,
                log.employee_id,
                log.department.value,
                log.task_description,
                log.task_status.value,
                f"{log.hours:g}",
            ]
        )
    return "\n".join(",".join(row) for row in rows)


def export_filename(today: Optional[date] = None) -> str:
    return f"ais_logs_{(today or date.today()).isoformat()}.csv"
