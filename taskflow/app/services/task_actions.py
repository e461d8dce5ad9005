"""Task actions: the entry points form and API handlers call to mutate tasks.

Each action trims its input, checks the title, delegates to the task store
and folds every outcome into an ``ActionResult`` instead of raising. A
successful mutation revalidates the task list path so the next render
re-fetches from the store.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional, Type, TypeVar

from taskflow.app.core.errors import TaskValidationError
from taskflow.app.schemas import ActionResult, ErrorKind, TaskFields, TaskPriority, TaskStatus
from taskflow.app.utils.timing import log_action_timing
from taskflow.ports.task_store import ITaskStore

logger = logging.getLogger(__name__)

TASK_LIST_PATH = "/"

TITLE_REQUIRED = "Title is required"
TASK_NOT_FOUND = "Task not found"
CREATE_FAILED = "Failed to create task"
UPDATE_FAILED = "Failed to update task"
DELETE_FAILED = "Failed to delete task"
TOGGLE_FAILED = "Failed to update task status"

_NEXT_STATUS = {
    TaskStatus.PENDING: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.PENDING,
}

E = TypeVar("E", TaskStatus, TaskPriority)


def next_status(current: Any) -> TaskStatus:
    """Advance pending -> in-progress -> completed -> pending; anything else -> pending."""

    try:
        return _NEXT_STATUS[TaskStatus(current)]
    except ValueError:
        return TaskStatus.PENDING


def _text(form: Mapping[str, Any], key: str) -> Optional[str]:
    value = form.get(key)
    if value is None:
        return None
    return str(value).strip()


def _choice(form: Mapping[str, Any], key: str, enum_cls: Type[E]) -> Optional[E]:
    raw = _text(form, key)
    if not raw:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        raise TaskValidationError(f"Invalid {key}") from None


def _new_task_fields(form: Mapping[str, Any], title: str) -> TaskFields:
    return TaskFields(
        title=title,
        description=_text(form, "description") or "",
        status=_choice(form, "status", TaskStatus) or TaskStatus.PENDING,
        priority=_choice(form, "priority", TaskPriority) or TaskPriority.MEDIUM,
        due_date=_text(form, "due_date") or None,
    )


def _update_patch(form: Mapping[str, Any], title: str) -> dict[str, Any]:
    patch: dict[str, Any] = {"title": title}
    description = _text(form, "description")
    if description is not None:
        patch["description"] = description
    status = _choice(form, "status", TaskStatus)
    if status is not None:
        patch["status"] = status
    priority = _choice(form, "priority", TaskPriority)
    if priority is not None:
        patch["priority"] = priority
    if "due_date" in form:
        patch["due_date"] = _text(form, "due_date") or None
    return patch


class TaskActions:
    """Validate, delegate to the store, and report a tagged result."""

    def __init__(self, store: ITaskStore) -> None:
        self._store = store
        self.revalidated: list[str] = []

    def _revalidate(self, path: str) -> None:
        self.revalidated.append(path)
        logger.debug("revalidate path=%s", path)

    def _finish(
        self,
        action: str,
        start: float,
        result: ActionResult,
        task_id: Optional[str] = None,
    ) -> ActionResult:
        if result.success:
            self._revalidate(TASK_LIST_PATH)
        outcome = "success" if result.success else result.kind.value
        log_action_timing(
            logger,
            action=action,
            outcome=outcome,
            start_time=start,
            task_id=task_id or result.task_id,
        )
        return result

    async def create(self, form: Mapping[str, Any]) -> ActionResult:
        start = time.perf_counter()
        title = _text(form, "title") or ""
        if not title:
            return self._finish("create", start, ActionResult.fail(ErrorKind.VALIDATION, TITLE_REQUIRED))
        try:
            fields = _new_task_fields(form, title)
        except TaskValidationError as exc:
            return self._finish("create", start, ActionResult.fail(ErrorKind.VALIDATION, exc.message))

        try:
            task = await self._store.create(fields)
        except Exception:
            logger.exception("create task failed", extra={"action": "create", "outcome": "internal"})
            return self._finish("create", start, ActionResult.fail(ErrorKind.INTERNAL, CREATE_FAILED))
        return self._finish("create", start, ActionResult.ok(task.id))

    async def update(self, task_id: str, form: Mapping[str, Any]) -> ActionResult:
        start = time.perf_counter()
        title = _text(form, "title") or ""
        if not title:
            return self._finish(
                "update", start, ActionResult.fail(ErrorKind.VALIDATION, TITLE_REQUIRED), task_id
            )
        try:
            patch = _update_patch(form, title)
        except TaskValidationError as exc:
            return self._finish(
                "update", start, ActionResult.fail(ErrorKind.VALIDATION, exc.message), task_id
            )

        try:
            task = await self._store.update(task_id, patch)
        except Exception:
            logger.exception(
                "update task failed",
                extra={"task": task_id, "action": "update", "outcome": "internal"},
            )
            return self._finish("update", start, ActionResult.fail(ErrorKind.INTERNAL, UPDATE_FAILED), task_id)
        if task is None:
            return self._finish(
                "update", start, ActionResult.fail(ErrorKind.NOT_FOUND, TASK_NOT_FOUND), task_id
            )
        return self._finish("update", start, ActionResult.ok(task.id))

    async def delete(self, task_id: str) -> ActionResult:
        start = time.perf_counter()
        try:
            removed = await self._store.delete(task_id)
        except Exception:
            logger.exception(
                "delete task failed",
                extra={"task": task_id, "action": "delete", "outcome": "internal"},
            )
            return self._finish("delete", start, ActionResult.fail(ErrorKind.INTERNAL, DELETE_FAILED), task_id)
        if not removed:
            return self._finish(
                "delete", start, ActionResult.fail(ErrorKind.NOT_FOUND, TASK_NOT_FOUND), task_id
            )
        return self._finish("delete", start, ActionResult.ok(task_id))

    async def toggle_status(self, task_id: str, current_status: Any) -> ActionResult:
        start = time.perf_counter()
        new_status = next_status(current_status)
        try:
            task = await self._store.update(task_id, {"status": new_status})
        except Exception:
            logger.exception(
                "toggle task status failed",
                extra={"task": task_id, "action": "toggle_status", "outcome": "internal"},
            )
            return self._finish(
                "toggle_status", start, ActionResult.fail(ErrorKind.INTERNAL, TOGGLE_FAILED), task_id
            )
        if task is None:
            return self._finish(
                "toggle_status", start, ActionResult.fail(ErrorKind.NOT_FOUND, TASK_NOT_FOUND), task_id
            )
        return self._finish("toggle_status", start, ActionResult.ok(task.id))
