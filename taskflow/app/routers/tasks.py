"""Task board HTML pages and JSON API routers."""

import logging
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from taskflow.app.deps import get_task_actions, get_task_store
from taskflow.app.schemas import (
    ActionResult,
    ErrorKind,
    Task,
    TaskInput,
    TaskStats,
    TaskStatus,
    ToggleRequest,
)
from taskflow.app.services.task_actions import (
    DELETE_FAILED,
    TASK_LIST_PATH,
    TASK_NOT_FOUND,
    TOGGLE_FAILED,
    TaskActions,
)
from taskflow.app.task_store_utils import filter_by_status
from taskflow.app.web.i18n import t
from taskflow.app.web.template_helpers import date_input_value
from taskflow.app.web.templates import get_templates
from taskflow.ports.task_store import ITaskStore

logger = logging.getLogger(__name__)

pages_router = APIRouter()
api_router = APIRouter(prefix="/api", tags=["tasks"])
templates = get_templates()

_FORM_FIELDS = ("title", "description", "status", "priority", "due_date")
_NEW_TASK_FORM = {"title": "", "description": "", "status": "pending", "priority": "medium", "due_date": ""}

_HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


_TOAST_KEYS = ("toast_created", "toast_updated", "toast_deleted", "toast_status_updated")
# errors the toggle and delete handlers redirect with
_REDIRECT_ERRORS = frozenset({TASK_NOT_FOUND, TOGGLE_FAILED, DELETE_FAILED})


def _known_notice(notice: Optional[str]) -> Optional[str]:
    """Return the notice only if this app could have produced it; links can't inject toast text."""
    if notice in _REDIRECT_ERRORS or notice in {t(key) for key in _TOAST_KEYS}:
        return notice
    return None


def _http_status(result: ActionResult) -> int:
    return _HTTP_STATUS.get(result.kind, 500)


def _parse_filter(value: Optional[str]) -> Optional[TaskStatus]:
    if not value or value == "all":
        return None
    try:
        return TaskStatus(value)
    except ValueError:
        return None


def _form_values(form: Mapping[str, Any]) -> dict[str, str]:
    return {key: str(form.get(key) or "") for key in _FORM_FIELDS}


def _task_form_values(task: Task) -> dict[str, str]:
    return {
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
        "priority": task.priority.value,
        "due_date": date_input_value(task.due_date),
    }


def _redirect_with_notice(actions: TaskActions, notice: str, level: str = "success") -> RedirectResponse:
    path = actions.revalidated[-1] if actions.revalidated else TASK_LIST_PATH
    query = urlencode({"notice": notice, "level": level})
    return RedirectResponse(url=f"{path}?{query}", status_code=303)


def _not_found_page(request: Request, task_id: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "task_not_found.html",
        {"task_id": task_id},
        status_code=404,
    )


async def _render_board(
    request: Request,
    store: ITaskStore,
    *,
    status_filter: Optional[str] = None,
    notice: Optional[str] = None,
    level: str = "success",
    form_values: Optional[dict[str, str]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    active = _parse_filter(status_filter)
    stats = await store.stats()
    tasks = filter_by_status(await store.list(), active)
    return templates.TemplateResponse(
        request,
        "tasks.html",
        {
            "stats": stats,
            "tasks": tasks,
            "active_filter": active.value if active else "all",
            "filter_label": t("status_" + active.value.replace("-", "_")) if active else "",
            "notice": notice,
            "level": "error" if level == "error" else "success",
            "form": form_values or dict(_NEW_TASK_FORM),
        },
        status_code=status_code,
    )


@pages_router.get("/", response_class=HTMLResponse)
async def tasks_page(
    request: Request,
    status_filter: Optional[str] = Query(default=None, alias="filter"),
    notice: Optional[str] = Query(default=None),
    level: str = Query(default="success"),
    store: ITaskStore = Depends(get_task_store),
):
    """Render the task board: stats tiles, create form, filter bar and task list."""

    return await _render_board(
        request, store, status_filter=status_filter, notice=_known_notice(notice), level=level
    )


@pages_router.post("/tasks", response_class=HTMLResponse)
async def create_task_form(
    request: Request,
    store: ITaskStore = Depends(get_task_store),
    actions: TaskActions = Depends(get_task_actions),
):
    form = await request.form()
    result = await actions.create(form)
    if result.success:
        return _redirect_with_notice(actions, t("toast_created"))
    # keep the submitted values so the user can correct them
    return await _render_board(
        request,
        store,
        notice=result.error,
        level="error",
        form_values=_form_values(form),
        status_code=_http_status(result),
    )


@pages_router.get("/tasks/{task_id}/edit", response_class=HTMLResponse)
async def edit_task_page(request: Request, task_id: str, store: ITaskStore = Depends(get_task_store)):
    task = await store.get(task_id)
    if task is None:
        return _not_found_page(request, task_id)
    return templates.TemplateResponse(
        request,
        "task_edit.html",
        {"task": task, "form": _task_form_values(task), "notice": None, "level": "success"},
    )


@pages_router.post("/tasks/{task_id}/edit", response_class=HTMLResponse)
async def edit_task_form(
    request: Request,
    task_id: str,
    store: ITaskStore = Depends(get_task_store),
    actions: TaskActions = Depends(get_task_actions),
):
    form = await request.form()
    result = await actions.update(task_id, form)
    if result.success:
        return _redirect_with_notice(actions, t("toast_updated"))
    task = await store.get(task_id)
    if task is None:
        return _not_found_page(request, task_id)
    return templates.TemplateResponse(
        request,
        "task_edit.html",
        {"task": task, "form": _form_values(form), "notice": result.error, "level": "error"},
        status_code=_http_status(result),
    )


@pages_router.post("/tasks/{task_id}/toggle")
async def toggle_task_form(
    request: Request,
    task_id: str,
    actions: TaskActions = Depends(get_task_actions),
):
    form = await request.form()
    result = await actions.toggle_status(task_id, form.get("current_status"))
    if result.success:
        return _redirect_with_notice(actions, t("toast_status_updated"))
    return _redirect_with_notice(actions, result.error, "error")


@pages_router.get("/tasks/{task_id}/delete", response_class=HTMLResponse)
async def delete_task_page(request: Request, task_id: str, store: ITaskStore = Depends(get_task_store)):
    """Ask for confirmation before deleting."""

    task = await store.get(task_id)
    if task is None:
        return _not_found_page(request, task_id)
    return templates.TemplateResponse(request, "task_delete.html", {"task": task})


@pages_router.post("/tasks/{task_id}/delete")
async def delete_task_form(task_id: str, actions: TaskActions = Depends(get_task_actions)):
    result = await actions.delete(task_id)
    if result.success:
        return _redirect_with_notice(actions, t("toast_deleted"))
    return _redirect_with_notice(actions, result.error, "error")


def _api_result(result: ActionResult, success_status: int = 200) -> JSONResponse:
    status_code = success_status if result.success else _http_status(result)
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json", exclude_none=True),
    )


@api_router.get("/tasks", response_model=list[Task])
async def list_tasks(
    status: Optional[TaskStatus] = Query(default=None),
    store: ITaskStore = Depends(get_task_store),
):
    """List tasks, newest first, optionally filtered by status."""

    return filter_by_status(await store.list(), status)


@api_router.get("/tasks/stats", response_model=TaskStats)
async def task_stats(store: ITaskStore = Depends(get_task_store)):
    return await store.stats()


@api_router.get("/tasks/{task_id}", response_model=Task)
async def get_task(task_id: str, store: ITaskStore = Depends(get_task_store)):
    task = await store.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@api_router.post("/tasks")
async def create_task(payload: TaskInput, actions: TaskActions = Depends(get_task_actions)):
    result = await actions.create(payload.model_dump(exclude_none=True))
    return _api_result(result, success_status=201)


@api_router.put("/tasks/{task_id}")
async def update_task(task_id: str, payload: TaskInput, actions: TaskActions = Depends(get_task_actions)):
    """Update a task; fields left out of the body keep their current values."""

    result = await actions.update(task_id, payload.model_dump(exclude_unset=True))
    return _api_result(result)


@api_router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, actions: TaskActions = Depends(get_task_actions)):
    return _api_result(await actions.delete(task_id))


@api_router.post("/tasks/{task_id}/toggle")
async def toggle_task_status(
    task_id: str,
    payload: ToggleRequest,
    actions: TaskActions = Depends(get_task_actions),
):
    return _api_result(await actions.toggle_status(task_id, payload.current_status))


# Public exports for API and HTML routers
__all__ = ["api_router", "pages_router"]
