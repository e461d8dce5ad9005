from datetime import datetime, timezone

from taskflow.app.schemas import TaskStatus
from taskflow.app.web import i18n
from taskflow.app.web.template_helpers import date_input_value, format_date, status_label


def test_format_date() -> None:
    assert format_date("2024-12-20") == "Dec 20, 2024"
    assert format_date("2024-12-15T14:00:00Z") == "Dec 15, 2024"
    assert format_date(datetime(2024, 1, 5, tzinfo=timezone.utc)) == "Jan 5, 2024"
    assert format_date(None) == ""
    assert format_date("someday") == "someday"


def test_date_input_value() -> None:
    assert date_input_value("2024-12-20T00:00:00Z") == "2024-12-20"
    assert date_input_value("2024-12-20") == "2024-12-20"
    assert date_input_value(None) == ""


def test_status_label() -> None:
    assert status_label(TaskStatus.IN_PROGRESS) == "In Progress"
    assert status_label("completed") == "Completed"


def test_translation_falls_back_to_english() -> None:
    assert i18n.t("status_pending", lang="zh") == "待处理"
    assert i18n.t("no_filter_tasks", lang="zh", filter="pending") == "No pending tasks at the moment"
    assert i18n.t("unknown_key", lang="zh") == "unknown_key"
