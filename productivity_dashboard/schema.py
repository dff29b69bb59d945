"""Core data schema for productivity logs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional


class Department(str, Enum):
    DATA_MANAGEMENT = "Data Management"
    ACCOUNTS_FINANCE = "Accounts/Finance"
    ADMIN_HR = "Admin/HR"
    IT = "IT"
    HSE = "HSE"
    PROCUREMENT = "Procurement"
    MAINTENANCE = "Maintenance"
    JANITORIAL = "Janitorial"
    INVENTORY = "Inventory"
    CORING_WELLSITE = "Coring/Wellsite"
    ISO = "Iso"
    ENVIRONMENTAL = "Environmental"
    RECEPTION = "Reception"
    CT_IMAGING_GAMMA = "CT/Imaging/Gamma"
    ROCKSHOP = "Rockshop"
    PVT_GC = "PVT/GC"
    SCAL_ROUTINE = "Scal/Routine"
    BUSINESS_DEVELOPMENT = "Business Development"
    SECURITY = "Security"


class TaskCategory(str, Enum):
    MAINTENANCE = "Maintenance"
    CONTRACT_TENDER = "Contract/Tender"
    SUPERVISION = "Supervision"
    INVENTORY = "Inventory"
    TRAINING = "Training"
    REPORTING = "Reporting"
    IT = "IT"
    ADMIN = "Admin"
    INVOICE = "Invoice"
    PROCUREMENT = "Procurement"
    HOUSE_KEEPING = "House Keeping"
    ACCOUNTS_FINANCE = "Accounts/Finance"
    HR = "HR"


class TaskStatus(str, Enum):
    COMPLETE = "Complete"
    IN_PROGRESS = "In Progress"
    INCOMPLETE = "Incomplete"


_REQUIRED_FIELDS = ("id", "department", "date", "task_category", "task_status")


@dataclass(frozen=True)
class ProductivityLog:
    """One task-level record submitted by an employee for a given day."""

    id: str
    employee_name: str
    employee_id: str
    department: Department
    date: date
    task_category: TaskCategory
    task_description: str
    task_status: TaskStatus
    hours: float
    productivity_rating: int
    blockers: str = ""
    tasks_carried_over: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ProductivityLog":
        """Build a log from a snake_case storage row.

        Raises ValueError on missing fields or values outside the enumerations.
        """

        missing = [field for field in _REQUIRED_FIELDS if record.get(field) in (None, "")]
        if missing:
            raise ValueError(f"missing required fields {missing}")

        raw_date = record["date"]
        if isinstance(raw_date, datetime):
            log_date = raw_date.date()
        elif isinstance(raw_date, date):
            log_date = raw_date
        else:
            try:
                log_date = date.fromisoformat(str(raw_date).strip()[:10])
            except ValueError as exc:
                raise ValueError(f"malformed date '{raw_date}'") from exc

        try:
            hours = float(record.get("hours") or 0.0)
        except (TypeError, ValueError) as exc:
            raise ValueError("invalid hours") from exc

        try:
            rating = int(record.get("productivity_rating") or 0)
        except (TypeError, ValueError) as exc:
            raise ValueError("invalid productivity_rating") from exc

        carried = record.get("tasks_carried_over")
        return cls(
            id=str(record["id"]).strip(),
            employee_name=str(record.get("employee_name") or "").strip(),
            employee_id=str(record.get("employee_id") or "").strip(),
            department=Department(str(record["department"]).strip()),
            date=log_date,
            task_category=TaskCategory(str(record["task_category"]).strip()),
            task_description=str(record.get("task_description") or "").strip(),
            task_status=TaskStatus(str(record["task_status"]).strip()),
            hours=hours,
            productivity_rating=rating,
            blockers=str(record.get("blockers") or ""),
            tasks_carried_over=str(carried) if carried else None,
        )

    def to_record(self) -> dict[str, Any]:
        """Snake_case row used by the stores and file adapters."""

        return {
            "id": self.id,
            "employee_name": self.employee_name,
            "employee_id": self.employee_id,
            "department": self.department.value,
            "date": self.date.isoformat(),
            "task_category": self.task_category.value,
            "task_description": self.task_description,
            "task_status": self.task_status.value,
            "hours": self.hours,
            "productivity_rating": self.productivity_rating,
            "blockers": self.blockers,
            "tasks_carried_over": self.tasks_carried_over,
        }
