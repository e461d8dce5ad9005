"""Dependency providers for the task store and task actions."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends

from taskflow.adapters.task_store_memory import MemoryTaskStore
from taskflow.app.config import Settings, get_settings
from taskflow.app.services.task_actions import TaskActions
from taskflow.ports.task_store import ITaskStore

logger = logging.getLogger(__name__)

# Process-wide store; the memory backend lives as long as the process
_task_store_instance: Optional[ITaskStore] = None


def build_task_store(settings: Optional[Settings] = None) -> ITaskStore:
    """Return a new store for the configured backend (memory unless TASK_STORE_BACKEND=sql)."""
    settings = settings or get_settings()
    backend = (settings.task_store_backend or "memory").lower()
    logger.info("TaskStore backend=%s", backend)
    if backend == "sql":
        # Imported lazily so the memory backend never touches SQLAlchemy
        from taskflow.adapters.task_store_sql import SqlTaskStore

        return SqlTaskStore(
            settings.database_url,
            latency_scale=settings.store_latency_scale,
            seed=settings.seed_demo_tasks,
        )
    return MemoryTaskStore(
        latency_scale=settings.store_latency_scale,
        seed=settings.seed_demo_tasks,
    )


def get_task_store() -> ITaskStore:
    global _task_store_instance
    if _task_store_instance is None:
        _task_store_instance = build_task_store()
    return _task_store_instance


def get_task_actions(store: ITaskStore = Depends(get_task_store)) -> TaskActions:
    return TaskActions(store)
