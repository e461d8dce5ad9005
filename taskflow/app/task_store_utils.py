"""Helpers shared by the task store backends: ids, timestamps, merging, stats."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from taskflow.app.schemas import Task, TaskPriority, TaskStats, TaskStatus

# Seconds of simulated latency per store operation
LIST_DELAY = 0.1
GET_DELAY = 0.05
CREATE_DELAY = 0.2
UPDATE_DELAY = 0.2
DELETE_DELAY = 0.1

_IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}


def new_task_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on the way back)."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_updated_at(previous: datetime, now: Optional[datetime] = None) -> datetime:
    """Return a refreshed updated_at that never moves backwards."""

    now = now or utcnow()
    previous = as_utc(previous)
    return now if now >= previous else previous


def clean_patch(patch: Dict[str, Any]) -> Dict[str, Any]:
    """Drop fields a caller may never overwrite and keys Task does not know."""

    allowed = set(Task.model_fields) - _IMMUTABLE_FIELDS
    return {key: value for key, value in (patch or {}).items() if key in allowed}


async def simulate_latency(seconds: float, scale: float) -> None:
    delay = seconds * scale
    if delay > 0:
        await asyncio.sleep(delay)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    stats = TaskStats()
    for task in tasks:
        stats.total += 1
        if task.status == TaskStatus.PENDING:
            stats.pending += 1
        elif task.status == TaskStatus.IN_PROGRESS:
            stats.in_progress += 1
        elif task.status == TaskStatus.COMPLETED:
            stats.completed += 1
    return stats


def filter_by_status(tasks: Iterable[Task], status: Optional[TaskStatus]) -> List[Task]:
    if status is None:
        return list(tasks)
    return [task for task in tasks if task.status == status]


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def seed_tasks() -> List[Task]:
    """Demo tasks present in a fresh store, listed in display order."""

    return [
        Task(
            id="1",
            title="Complete project documentation",
            description=(
                "Write comprehensive documentation for the new feature "
                "including API specs and user guides"
            ),
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            due_date="2024-12-20",
            created_at=_ts("2024-12-15T10:00:00Z"),
            updated_at=_ts("2024-12-15T10:00:00Z"),
        ),
        Task(
            id="2",
            title="Review pull requests",
            description="Review and provide feedback on pending pull requests from the team",
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            due_date="2024-12-18",
            created_at=_ts("2024-12-15T11:00:00Z"),
            updated_at=_ts("2024-12-15T11:00:00Z"),
        ),
        Task(
            id="3",
            title="Update dependencies",
            description=(
                "Update all npm packages to their latest stable versions "
                "and test for compatibility"
            ),
            status=TaskStatus.COMPLETED,
            priority=TaskPriority.LOW,
            created_at=_ts("2024-12-14T09:00:00Z"),
            updated_at=_ts("2024-12-15T14:00:00Z"),
        ),
    ]
