from __future__ import annotations

from typing import Dict, Optional

from taskflow.app.config import get_settings

DEFAULT_LANG = "en"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "app_tagline": "Manage your tasks with style and efficiency",
        "add_new_task": "Add New Task",
        "edit_task": "Edit Task",
        "delete_task": "Delete Task",
        "title": "Title",
        "description": "Description",
        "status": "Status",
        "priority": "Priority",
        "due_date_optional": "Due Date (Optional)",
        "enter_task_title": "Enter task title",
        "enter_task_description": "Enter task description",
        "create_task": "Create Task",
        "creating": "Creating...",
        "saving": "Saving...",
        "save_changes": "Save Changes",
        "cancel": "Cancel",
        "toggle_status": "Toggle Status",
        "edit": "Edit",
        "delete": "Delete",
        "confirm_delete": "Are you sure you want to delete this task?",
        "total_tasks": "Total Tasks",
        "status_pending": "Pending",
        "status_in_progress": "In Progress",
        "status_completed": "Completed",
        "priority_low": "Low",
        "priority_medium": "Medium",
        "priority_high": "High",
        "filter_all": "All Tasks",
        "no_tasks_found": "No tasks found",
        "no_filter_tasks": "No {filter} tasks at the moment",
        "create_first_task": "Create your first task to get started",
        "due": "Due",
        "updated": "Updated",
        "task_not_found": "Task not found",
        "task_not_found_detail": "No task with id {task_id} exists.",
        "back_to_tasks": "Back to tasks",
        "toast_created": "Task created successfully",
        "toast_updated": "Task updated successfully",
        "toast_deleted": "Task deleted successfully",
        "toast_status_updated": "Task status updated",
    },
    "zh": {
        "app_tagline": "高效、有条理地管理你的任务",
        "add_new_task": "新建任务",
        "edit_task": "编辑任务",
        "delete_task": "删除任务",
        "title": "标题",
        "description": "描述",
        "status": "状态",
        "priority": "优先级",
        "due_date_optional": "截止日期（可选）",
        "enter_task_title": "输入任务标题",
        "enter_task_description": "输入任务描述",
        "create_task": "创建任务",
        "creating": "创建中...",
        "saving": "保存中...",
        "save_changes": "保存修改",
        "cancel": "取消",
        "toggle_status": "切换状态",
        "edit": "编辑",
        "delete": "删除",
        "confirm_delete": "确定要删除这个任务吗？",
        "total_tasks": "任务总数",
        "status_pending": "待处理",
        "status_in_progress": "进行中",
        "status_completed": "已完成",
        "priority_low": "低",
        "priority_medium": "中",
        "priority_high": "高",
        "filter_all": "全部任务",
        "no_tasks_found": "没有找到任务",
        "create_first_task": "创建你的第一个任务吧",
        "due": "截止",
        "updated": "更新于",
        "task_not_found": "任务不存在",
        "back_to_tasks": "返回任务列表",
        "toast_created": "任务已创建",
        "toast_updated": "任务已更新",
        "toast_deleted": "任务已删除",
        "toast_status_updated": "任务状态已更新",
    },
}


def _t(lang: str, key: str, **kwargs) -> str:
    s = TRANSLATIONS.get(lang, {}).get(key)
    if s is None and lang != DEFAULT_LANG:
        s = TRANSLATIONS[DEFAULT_LANG].get(key)
    if s is None:
        s = key
    try:
        return s.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return s


def t(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """Translate a UI label into ``lang`` (UI_LANG by default), falling back to English."""

    return _t(lang or get_settings().ui_lang, key, **kwargs)
