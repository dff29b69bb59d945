"""Store-facing operations used by the dashboard surfaces."""

from __future__ import annotations

import logging
from typing import Sequence

from productivity_dashboard.errors import StoreUnavailable
from productivity_dashboard.schema import Department, ProductivityLog
from productivity_dashboard.store import LogStore
from productivity_dashboard.submission import DailyLogSubmission, split_submission, validate_submission

logger = logging.getLogger(__name__)


def load_logs(store: LogStore) -> list[ProductivityLog]:
    """All logs, newest date first."""

    try:
        logs = store.list_logs()
    except StoreUnavailable:
        logger.exception("Error loading logs")
        raise
    return sorted(logs, key=lambda log: log.date, reverse=True)


def submit_daily_log(store: LogStore, submission: DailyLogSubmission) -> list[ProductivityLog]:
    """Validate a submission, then append one log per task."""

    validate_submission(submission)
    logs = split_submission(submission)
    for log in logs:
        try:
            store.append_log(log)
        except StoreUnavailable:
            logger.exception("Error saving log %s", log.id)
            raise
    logger.info("Saved %d logs for %s on %s", len(logs), submission.employee_name, submission.date)
    return logs


def filter_options(logs: Sequence[ProductivityLog]) -> dict[str, list[str]]:
    """Choices for the employee and department dropdowns."""

    return {
        "employees": sorted({log.employee_name for log in logs}),
        "departments": sorted(department.value for department in Department),
    }
