"""Port interface for task storage (store boundary)."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from taskflow.app.schemas import Task, TaskFields, TaskStats


@runtime_checkable
class ITaskStore(Protocol):
    """Task store abstraction for list/get/create/update/delete/stats operations."""

    async def list(self) -> list[Task]:
        """Return all tasks, most recently created first."""

    async def get(self, task_id: str) -> Optional[Task]:
        """Return a task by id or None when missing."""

    async def create(self, fields: TaskFields) -> Task:
        """Store a new task with a fresh id and timestamps and return it."""

    async def update(self, task_id: str, patch: dict[str, Any]) -> Optional[Task]:
        """Merge patch fields into a task; None when the id is unknown."""

    async def delete(self, task_id: str) -> bool:
        """Remove a task; True when something was removed."""

    async def stats(self) -> TaskStats:
        """Return per-status counts recomputed from list()."""
