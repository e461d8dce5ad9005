from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Tuple

from taskflow.app.schemas import TaskPriority, TaskStatus
from taskflow.app.web.i18n import t

STATUS_STYLES = {
    TaskStatus.PENDING.value: "badge-pending",
    TaskStatus.IN_PROGRESS.value: "badge-in-progress",
    TaskStatus.COMPLETED.value: "badge-completed",
}

PRIORITY_STYLES = {
    TaskPriority.LOW.value: "badge-low",
    TaskPriority.MEDIUM.value: "badge-medium",
    TaskPriority.HIGH.value: "badge-high",
}


def _value(choice: Any) -> str:
    return getattr(choice, "value", None) or str(choice or "")


def status_label(status: Any) -> str:
    return t("status_" + _value(status).replace("-", "_"))


def priority_label(priority: Any) -> str:
    return t("priority_" + _value(priority))


def status_class(status: Any) -> str:
    return STATUS_STYLES.get(_value(status), "")


def priority_class(priority: Any) -> str:
    return PRIORITY_STYLES.get(_value(priority), "")


def format_date(value: Any) -> str:
    """Render a date or ISO timestamp as e.g. ``Dec 20, 2024``."""

    if not value:
        return ""
    parsed: Any = value
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if not isinstance(parsed, date):
        return str(value)
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def date_input_value(value: Any) -> str:
    """Value for an ``<input type="date">``: the date part of a stored date string."""

    if not value:
        return ""
    return str(value).split("T")[0]


def status_choices() -> List[Tuple[str, str]]:
    return [(status.value, status_label(status)) for status in TaskStatus]


def priority_choices() -> List[Tuple[str, str]]:
    return [(priority.value, priority_label(priority)) for priority in TaskPriority]


def filter_choices() -> List[Tuple[str, str]]:
    return [("all", t("filter_all"))] + status_choices()


def get_template_globals() -> Dict[str, object]:
    return {
        "t": t,
        "status_label": status_label,
        "priority_label": priority_label,
        "status_class": status_class,
        "priority_class": priority_class,
        "status_choices": status_choices,
        "priority_choices": priority_choices,
        "filter_choices": filter_choices,
    }
