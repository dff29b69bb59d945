"""Demo script for productivity-dashboard."""

import json
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from productivity_dashboard.adapters.csv_adapter import parse
from productivity_dashboard.filters import LogFilter
from productivity_dashboard.metrics import compute_metrics
from productivity_dashboard.schema import Department


def main() -> None:
    logs = parse("examples/sample_logs.csv")
    today = date(2025, 1, 10)
    overall = compute_metrics(logs, today=today)
    it_only = compute_metrics(logs, LogFilter(department=Department.IT), today=today)
    print("Overall:", json.dumps(overall.to_dict()["executive_summary"], indent=2))
    print("IT:", json.dumps(it_only.to_dict()["executive_summary"], indent=2))


if __name__ == "__main__":
    main()
