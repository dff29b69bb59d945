"""Streamlit dashboard for productivity-dashboard."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from productivity_dashboard.adapters.csv_adapter import export_csv, export_filename
from productivity_dashboard.config import configure_logging, load_settings
from productivity_dashboard.errors import GenerationError, StoreUnavailable, ValidationError
from productivity_dashboard.filters import LogFilter
from productivity_dashboard.insights import cached_insight, generate_weekly_insight
from productivity_dashboard.metrics import compute_metrics
from productivity_dashboard.schema import Department, ProductivityLog, TaskCategory, TaskStatus
from productivity_dashboard.service import filter_options, load_logs, submit_daily_log
from productivity_dashboard.submission import DailyLogSubmission, TaskItem

TABS = [
    "Executive Summary",
    "Employee Analysis",
    "Department Analysis",
    "Task Quality",
    "Data Quality",
    "Weekly Insight",
]
ALL = "All"
RECENT_ACTIVITY_SIZE = 10


def _pct(value: float) -> str:
    return f"{value:.1f}%"


def build_dashboard(all_logs: list[ProductivityLog], log_filter: LogFilter, today: Optional[date] = None) -> dict[str, Any]:
    """Filter, aggregate and shape everything the page renders."""

    metrics = compute_metrics(all_logs, log_filter, today=today)
    filtered = metrics.filtered_logs
    summary = metrics.executive_summary
    total = summary.total_tasks

    return {
        "logs": filtered,
        "metrics": metrics,
        "kpis": {
            "Total Tasks": str(total),
            "Completion Rate": _pct(summary.completion_rate),
            "Total Hours": f"{summary.total_hours:.1f}",
            "Avg Task Duration": f"{summary.avg_task_duration:.1f}h",
            "Utilization": _pct(summary.overall_utilization_rate),
            "Top Department": summary.top_performing_dept,
            "Needs Attention": summary.least_performing_dept,
        },
        "status_rows": [
            {"Status": status.value, "Count": count, "Share": _pct(count / total * 100.0 if total else 0.0)}
            for status, count in metrics.status_distribution.items()
        ],
        "trend_rows": [
            {"Day": point.label, "Total Tasks": point.total_tasks, "Completed Tasks": point.completed_tasks}
            for point in metrics.daily_trend
        ],
        "recent_rows": [
            {
                "Date": log.date.isoformat(),
                "Employee": log.employee_name,
                "Status": log.task_status.value,
                "Hours": f"{log.hours:.1f}",
            }
            for log in filtered[:RECENT_ACTIVITY_SIZE]
        ],
        "options": filter_options(all_logs),
    }


def _sidebar_filter(st, options: dict[str, list[str]]) -> LogFilter:
    st.header("Filters")
    start = st.date_input("Start date", value=None)
    end = st.date_input("End date", value=None)
    department = st.selectbox("Department", options=[ALL, *options["departments"]])
    employee = st.selectbox("Employee", options=[ALL, *options["employees"]])
    return LogFilter(
        date_start=start,
        date_end=end,
        department=None if department == ALL else Department(department),
        employee=None if employee == ALL else employee,
    )


def build_submission(form: dict[str, Any], tasks: list[TaskItem]) -> DailyLogSubmission:
    """Map the log-entry form widgets onto a submission. The form date is used as-is."""

    return DailyLogSubmission(
        employee_name=form["employee_name"],
        employee_id=form["employee_id"],
        department=form["department"],
        date=form["date"],
        hours=form["hours"],
        productivity_rating=form["productivity_rating"],
        blockers=form.get("blockers") or "",
        tasks_carried_over=form.get("tasks_carried_over") or None,
        tasks=tuple(tasks),
    )


def _log_entry_form(st, store) -> None:
    st.subheader("Daily Productivity Log")
    task_count = st.number_input("Number of tasks", min_value=1, max_value=20, value=1, step=1)

    with st.form("daily_log", clear_on_submit=True):
        c1, c2 = st.columns(2)
        employee_name = c1.text_input("Employee Name *")
        employee_id = c2.text_input("Employee ID *")
        log_date = c1.date_input("Date *", value=date.today(), max_value=date.today())
        department = c1.selectbox("Department *", options=[None, *Department], format_func=lambda d: d.value if d else "Select Department")
        hours = c2.number_input("Total Hours Worked *", min_value=0.0, max_value=24.0, step=0.5, value=None)
        rating = st.radio("Overall Productivity Rating *", options=[1, 2, 3, 4, 5], horizontal=True, index=None)

        tasks = []
        for index in range(int(task_count)):
            t1, t2, t3 = st.columns([3, 1, 1])
            description = t1.text_input(f"Task {index + 1}", key=f"task_desc_{index}")
            category = t2.selectbox("Category", options=list(TaskCategory), index=list(TaskCategory).index(TaskCategory.ADMIN), format_func=lambda c: c.value, key=f"task_cat_{index}")
            status = t3.selectbox("Status", options=list(TaskStatus), index=1, format_func=lambda s: s.value, key=f"task_status_{index}")
            tasks.append(TaskItem(task_description=description, task_category=category, task_status=status))

        carried = st.text_area("Tasks Carried Over to Next Day", placeholder="Tasks pending for tomorrow...")
        blockers = st.text_area("Blockers / Issues", placeholder="Any obstacles or issues faced today...")
        submitted = st.form_submit_button("Submit Daily Log", type="primary")

    if not submitted:
        return

    submission = build_submission(
        {
            "employee_name": employee_name,
            "employee_id": employee_id,
            "department": department,
            "date": log_date,
            "hours": hours,
            "productivity_rating": rating,
            "blockers": blockers,
            "tasks_carried_over": carried,
        },
        tasks,
    )
    try:
        submit_daily_log(store, submission)
    except ValidationError as exc:
        st.error(str(exc))
    except StoreUnavailable:
        st.error("Could not save the log. Please try again later.")
    else:
        st.success("Log submitted successfully!")


def main() -> None:
    import streamlit as st

    settings = load_settings()
    configure_logging(settings.log_level)
    store = settings.build_store()

    st.set_page_config(page_title="Productivity Dashboard", layout="wide")
    st.title("Productivity Dashboard")

    page = st.sidebar.radio("Page", options=["Dashboard", "Log Entry"])
    if page == "Log Entry":
        _log_entry_form(st, store)
        return

    try:
        all_logs = load_logs(store)
    except StoreUnavailable:
        st.error("Could not load logs from the store.")
        all_logs = []

    with st.sidebar:
        log_filter = _sidebar_filter(st, filter_options(all_logs))

    view = build_dashboard(all_logs, log_filter)
    metrics = view["metrics"]

    if view["logs"]:
        st.download_button(
            "Export CSV",
            data=export_csv(view["logs"]),
            file_name=export_filename(),
            mime="text/csv",
        )

    tabs = st.tabs(TABS)

    with tabs[0]:
        cols = st.columns(4)
        for index, (title, value) in enumerate(view["kpis"].items()):
            cols[index % 4].metric(title, value)
        st.subheader("Daily Trend (last 7 days)")
        st.line_chart(view["trend_rows"], x="Day", y=["Total Tasks", "Completed Tasks"])

    with tabs[1]:
        st.subheader("Employee Leaderboard")
        st.table(
            [
                {
                    "Employee": entry.name,
                    "Completed Tasks": entry.completed_tasks,
                    "Avg Task Duration": f"{entry.avg_task_duration:.1f}h",
                    "Utilization": _pct(entry.utilization_rate),
                }
                for entry in metrics.employee_leaderboard
            ]
        )
        st.subheader("Recent Activity")
        st.table(view["recent_rows"])

    with tabs[2]:
        st.subheader("Department Performance")
        st.table(
            [
                {
                    "Department": row.department.value,
                    "Total Tasks": row.total_tasks,
                    "Completion Rate": _pct(row.completion_rate),
                    "Avg Task Duration": f"{row.avg_task_duration:.1f}h",
                    "Utilization": _pct(row.utilization_rate),
                }
                for row in metrics.department_performance
            ]
        )

    with tabs[3]:
        st.subheader("Task Status Distribution")
        st.bar_chart(view["status_rows"], x="Status", y="Count")
        st.table(view["status_rows"])

    with tabs[4]:
        q1, q2 = st.columns(2)
        q1.metric("Form Completeness", _pct(metrics.data_quality.form_completeness_score))
        q2.metric("Missing Time Entries", _pct(metrics.data_quality.missing_time_entries))

    with tabs[5]:
        cache = settings.build_insight_cache()
        if st.button("Generate Weekly Insight", disabled=not view["logs"]):
            with st.spinner("Analyzing..."):
                try:
                    generate_weekly_insight(settings.build_insight_generator(), cache, view["logs"])
                except GenerationError as exc:
                    st.error(f"Failed to generate insights: {exc}")
        insight = cached_insight(cache)
        if insight:
            st.markdown(insight)
        else:
            st.info("No insight generated yet.")


if __name__ == "__main__":
    main()
