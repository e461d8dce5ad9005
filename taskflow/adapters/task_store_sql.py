"""SQLAlchemy-backed task store (TASK_STORE_BACKEND=sql)."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from taskflow.app.core.errors import TaskStoreError
from taskflow.app.db import Base, build_engine, build_session_factory
from taskflow.app.models import TaskRecord
from taskflow.app.schemas import Task, TaskFields, TaskPriority, TaskStats, TaskStatus
from taskflow.app.task_store_utils import (
    CREATE_DELAY,
    DELETE_DELAY,
    GET_DELAY,
    LIST_DELAY,
    UPDATE_DELAY,
    as_utc,
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

T = TypeVar("T")


def _to_task(record: TaskRecord) -> Task:
    return Task(
        id=record.id,
        title=record.title,
        description=record.description or "",
        status=TaskStatus(record.status),
        priority=TaskPriority(record.priority),
        due_date=record.due_date,
        created_at=as_utc(record.created_at),
        updated_at=as_utc(record.updated_at),
    )


def _apply(record: TaskRecord, values: dict[str, Any]) -> None:
    for key, value in values.items():
        if isinstance(value, (TaskStatus, TaskPriority)):
            value = value.value
        setattr(record, key, value)


class SqlTaskStore(ITaskStore):
    """Task store persisted in a relational database through SQLAlchemy."""

    def __init__(
        self,
        database_url: str,
        *,
        latency_scale: float = 1.0,
        seed: bool = True,
    ) -> None:
        self._latency_scale = latency_scale
        self._lock = threading.Lock()
        self._engine = build_engine(database_url)
        self._session_factory = build_session_factory(self._engine)
        Base.metadata.create_all(bind=self._engine)
        if seed:
            self._run(self._seed_if_empty)

    def _run(self, fn: Callable[[Session], T]) -> T:
        session: Session = self._session_factory()
        try:
            result = fn(session)
            session.commit()
            return result
        except SQLAlchemyError as exc:
            session.rollback()
            raise TaskStoreError(f"task store query failed: {exc}", cause=exc) from exc
        finally:
            session.close()

    def _locked(self, fn: Callable[[Session], T]) -> T:
        with self._lock:
            return self._run(fn)

    def _seed_if_empty(self, session: Session) -> None:
        if session.query(TaskRecord).count():
            return
        seeds = seed_tasks()
        for offset, task in enumerate(seeds):
            record = TaskRecord(seq=len(seeds) - offset)
            _apply(record, task.model_dump())
            session.add(record)
        logger.info("seeded %d demo tasks", len(seeds))

    async def list(self) -> list[Task]:
        await simulate_latency(LIST_DELAY, self._latency_scale)

        def _list(session: Session) -> list[Task]:
            records = session.query(TaskRecord).order_by(TaskRecord.seq.desc()).all()
            return [_to_task(record) for record in records]

        return await run_in_threadpool(self._run, _list)

    async def get(self, task_id: str) -> Optional[Task]:
        await simulate_latency(GET_DELAY, self._latency_scale)

        def _get(session: Session) -> Optional[Task]:
            record = session.get(TaskRecord, task_id)
            return _to_task(record) if record else None

        return await run_in_threadpool(self._run, _get)

    async def create(self, fields: TaskFields) -> Task:
        await simulate_latency(CREATE_DELAY, self._latency_scale)
        now = utcnow()

        def _create(session: Session) -> Task:
            task_id = new_task_id()
            while session.get(TaskRecord, task_id) is not None:
                task_id = new_task_id()
            seq = (session.query(func.max(TaskRecord.seq)).scalar() or 0) + 1
            record = TaskRecord(id=task_id, seq=seq, created_at=now, updated_at=now)
            _apply(record, fields.model_dump())
            session.add(record)
            session.flush()
            return _to_task(record)

        task = await run_in_threadpool(self._locked, _create)
        logger.debug("task stored", extra={"task": task.id, "action": "create"})
        return task

    async def update(self, task_id: str, patch: dict[str, Any]) -> Optional[Task]:
        await simulate_latency(UPDATE_DELAY, self._latency_scale)
        changes = clean_patch(patch)

        def _update(session: Session) -> Optional[Task]:
            record = session.get(TaskRecord, task_id)
            if record is None:
                return None
            _apply(record, changes)
            record.updated_at = next_updated_at(record.updated_at)
            session.flush()
            return _to_task(record)

        return await run_in_threadpool(self._locked, _update)

    async def delete(self, task_id: str) -> bool:
        await simulate_latency(DELETE_DELAY, self._latency_scale)

        def _delete(session: Session) -> bool:
            removed = session.query(TaskRecord).filter(TaskRecord.id == task_id).delete()
            return removed > 0

        removed = await run_in_threadpool(self._locked, _delete)
        if removed:
            logger.debug("task removed", extra={"task": task_id, "action": "delete"})
        return removed

    async def stats(self) -> TaskStats:
        return compute_stats(await self.list())
