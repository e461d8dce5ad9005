"""In-memory task store (default backend, resets on process restart)."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from taskflow.app.schemas import Task, TaskFields, TaskStats
from taskflow.app.task_store_utils import (
    CREATE_DELAY,
    DELETE_DELAY,
    GET_DELAY,
    LIST_DELAY,
    UPDATE_DELAY,
    clean_patch,
    compute_stats,
    new_task_id,
    next_updated_at,
    seed_tasks,
    simulate_latency,
    utcnow,
)
from taskflow.ports.task_store import ITaskStore

logger = logging.getLogger(__name__)


class MemoryTaskStore(ITaskStore):
    """Ordered task collection held in process memory, newest first."""

    def __init__(self, *, latency_scale: float = 1.0, seed: bool = True) -> None:
        self._latency_scale = latency_scale
        self._lock = threading.Lock()
        self._tasks: list[Task] = seed_tasks() if seed else []

    async def list(self) -> list[Task]:
        await simulate_latency(LIST_DELAY, self._latency_scale)
        with self._lock:
            return list(self._tasks)

    async def get(self, task_id: str) -> Optional[Task]:
        await simulate_latency(GET_DELAY, self._latency_scale)
        with self._lock:
            return next((task for task in self._tasks if task.id == task_id), None)

    async def create(self, fields: TaskFields) -> Task:
        await simulate_latency(CREATE_DELAY, self._latency_scale)
        now = utcnow()
        with self._lock:
            task_id = new_task_id()
            while any(task.id == task_id for task in self._tasks):
                task_id = new_task_id()
            task = Task(id=task_id, created_at=now, updated_at=now, **fields.model_dump())
            self._tasks.insert(0, task)
        logger.debug("task stored", extra={"task": task.id, "action": "create"})
        return task

    async def update(self, task_id: str, patch: dict[str, Any]) -> Optional[Task]:
        await simulate_latency(UPDATE_DELAY, self._latency_scale)
        changes = clean_patch(patch)
        with self._lock:
            for index, current in enumerate(self._tasks):
                if current.id != task_id:
                    continue
                changes["updated_at"] = next_updated_at(current.updated_at)
                # validated rebuild so raw strings become enums like the SQL store's rows
                updated = Task.model_validate({**current.model_dump(), **changes})
                self._tasks[index] = updated
                return updated
        return None

    async def delete(self, task_id: str) -> bool:
        await simulate_latency(DELETE_DELAY, self._latency_scale)
        with self._lock:
            initial = len(self._tasks)
            self._tasks = [task for task in self._tasks if task.id != task_id]
            removed = len(self._tasks) < initial
        if removed:
            logger.debug("task removed", extra={"task": task_id, "action": "delete"})
        return removed

    async def stats(self) -> TaskStats:
        return compute_stats(await self.list())
