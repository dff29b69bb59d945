"""Compute the dashboard metrics bundle from a CSV/JSON log file."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from productivity_dashboard.adapters import csv_adapter, json_adapter
from productivity_dashboard.config import configure_logging
from productivity_dashboard.filters import LogFilter, apply_filters
from productivity_dashboard.metrics import compute_metrics
from productivity_dashboard.schema import Department


def _load_logs(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Build productivity KPI report")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON logs file")
    parser.add_argument("--start", type=date.fromisoformat, help="First date to include (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Last date to include (YYYY-MM-DD)")
    parser.add_argument("--department", type=Department, help="Department name")
    parser.add_argument("--employee", help="Employee name")
    parser.add_argument("--today", type=date.fromisoformat, help="Last day of the 7-day trend")
    parser.add_argument("--export-csv", help="Also write the filtered-log CSV export here")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    configure_logging(args.log_level)

    logs = _load_logs(Path(args.data))
    log_filter = LogFilter(date_start=args.start, date_end=args.end, department=args.department, employee=args.employee)
    report = compute_metrics(logs, log_filter, today=args.today).to_dict()
    report["filter"] = {
        "date_start": args.start.isoformat() if args.start else None,
        "date_end": args.end.isoformat() if args.end else None,
        "department": args.department.value if args.department else None,
        "employee": args.employee,
    }

    print(json.dumps(report, indent=2))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "metrics_report.json"
    out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved metrics report to {out_path}")

    if args.export_csv:
        Path(args.export_csv).write_text(csv_adapter.export_csv(apply_filters(logs, log_filter)), encoding="utf-8")
        print(f"Saved CSV export to {args.export_csv}")


if __name__ == "__main__":
    main()
