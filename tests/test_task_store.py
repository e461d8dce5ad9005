from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from taskflow.adapters import task_store_memory
from taskflow.adapters.task_store_memory import MemoryTaskStore
from taskflow.adapters.task_store_sql import SqlTaskStore
from taskflow.app.config import Settings
from taskflow.app.core.errors import TaskStoreError
from taskflow.app.deps import build_task_store, get_task_store
from taskflow.app.schemas import ErrorKind, TaskFields, TaskPriority, TaskStats, TaskStatus
from taskflow.app.services.task_actions import CREATE_FAILED, TaskActions
from taskflow.main import app


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
    if request.param == "sql":
        return SqlTaskStore("sqlite://", latency_scale=0)
    return MemoryTaskStore(latency_scale=0)


def test_seed_order_and_stats(any_store) -> None:
    tasks = asyncio.run(any_store.list())
    assert [t.id for t in tasks] == ["1", "2", "3"]
    assert [t.status for t in tasks] == [
        TaskStatus.IN_PROGRESS,
        TaskStatus.PENDING,
        TaskStatus.COMPLETED,
    ]
    assert tasks[2].due_date is None

    stats = asyncio.run(any_store.stats())
    assert stats == TaskStats(total=3, pending=1, in_progress=1, completed=1)


def test_create_prepends_with_fresh_id(any_store) -> None:
    task = asyncio.run(
        any_store.create(TaskFields(title="Buy milk", priority=TaskPriority.LOW))
    )

    assert task.id not in {"1", "2", "3"}
    assert task.created_at == task.updated_at
    assert task.status == TaskStatus.PENDING
    assert task.description == ""

    tasks = asyncio.run(any_store.list())
    assert tasks[0].id == task.id
    assert tasks[0].title == "Buy milk"
    assert len(tasks) == 4


def test_update_merges_patch_and_refreshes_updated_at(any_store) -> None:
    before = asyncio.run(any_store.get("2"))

    after = asyncio.run(any_store.update("2", {"status": TaskStatus.COMPLETED}))

    assert after is not None
    assert after.status == TaskStatus.COMPLETED
    assert after.title == before.title
    assert after.description == before.description
    assert after.priority == before.priority
    assert after.due_date == before.due_date
    assert after.created_at == before.created_at
    assert after.updated_at >= before.updated_at
    assert asyncio.run(any_store.get("2")).status == TaskStatus.COMPLETED


def test_update_coerces_raw_enum_values(any_store) -> None:
    after = asyncio.run(
        any_store.update("2", {"status": "completed", "priority": "low"})
    )

    assert after.status is TaskStatus.COMPLETED
    assert after.priority is TaskPriority.LOW
    stored = asyncio.run(any_store.get("2"))
    assert stored.status is TaskStatus.COMPLETED
    assert stored.priority.value == "low"


def test_edit_page_renders_after_raw_status_update(any_store) -> None:
    asyncio.run(any_store.update("2", {"status": "completed"}))
    app.dependency_overrides[get_task_store] = lambda: any_store
    try:
        resp = TestClient(app).get("/tasks/2/edit")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 200
    assert 'value="completed" selected' in resp.text


def test_update_ignores_identity_fields(any_store) -> None:
    before = asyncio.run(any_store.get("1"))

    after = asyncio.run(
        any_store.update("1", {"id": "other", "created_at": None, "title": "Docs"})
    )

    assert after.id == "1"
    assert after.created_at == before.created_at
    assert after.title == "Docs"


def test_update_missing_returns_none(any_store) -> None:
    assert asyncio.run(any_store.update("nonexistent-id", {"title": "x"})) is None
    assert len(asyncio.run(any_store.list())) == 3


def test_delete_removes_exactly_one(any_store) -> None:
    assert asyncio.run(any_store.delete("2")) is True

    remaining = asyncio.run(any_store.list())
    assert [t.id for t in remaining] == ["1", "3"]
    assert asyncio.run(any_store.get("2")) is None


def test_delete_missing_reports_no_removal(any_store) -> None:
    assert asyncio.run(any_store.delete("nonexistent-id")) is False
    assert len(asyncio.run(any_store.list())) == 3


def test_stats_sum_matches_total_after_mutations(any_store) -> None:
    async def scenario():
        await any_store.create(TaskFields(title="a"))
        await any_store.create(TaskFields(title="b", status=TaskStatus.COMPLETED))
        await any_store.update("1", {"status": TaskStatus.PENDING})
        await any_store.delete("3")
        return await any_store.stats()

    stats = asyncio.run(scenario())
    assert stats.total == 4
    assert stats.pending + stats.in_progress + stats.completed == stats.total
    assert stats.pending == 3


def test_concurrent_creates_get_unique_ids(any_store) -> None:
    async def scenario():
        return await asyncio.gather(
            *(any_store.create(TaskFields(title=f"task {i}")) for i in range(20))
        )

    created = asyncio.run(scenario())
    ids = {task.id for task in created}
    assert len(ids) == 20
    assert len(asyncio.run(any_store.list())) == 23


def test_unseeded_store_is_empty() -> None:
    store = MemoryTaskStore(latency_scale=0, seed=False)
    assert asyncio.run(store.list()) == []
    assert asyncio.run(store.stats()) == TaskStats()


def test_latency_is_scaled(monkeypatch) -> None:
    delays: list[tuple[float, float]] = []

    async def fake_simulate_latency(seconds: float, scale: float) -> None:
        delays.append((seconds, scale))

    monkeypatch.setattr(task_store_memory, "simulate_latency", fake_simulate_latency)
    store = MemoryTaskStore(latency_scale=0.5)

    asyncio.run(store.get("1"))
    asyncio.run(store.create(TaskFields(title="slow")))

    assert delays == [(0.05, 0.5), (0.2, 0.5)]


def test_build_task_store_selects_backend() -> None:
    settings = Settings(
        task_store_backend="sql",
        database_url="sqlite://",
        seed_demo_tasks=False,
        store_latency_scale=0,
    )

    store = build_task_store(settings)

    assert isinstance(store, SqlTaskStore)
    assert asyncio.run(store.list()) == []


def test_build_task_store_defaults_to_seeded_memory() -> None:
    store = build_task_store(Settings(task_store_backend="memory", store_latency_scale=0))

    assert isinstance(store, MemoryTaskStore)
    assert [t.id for t in asyncio.run(store.list())] == ["1", "2", "3"]


class _FailingSession:
    def __init__(self) -> None:
        self.rolled_back = False
        self.closed = False

    def get(self, *args, **kwargs):
        raise SQLAlchemyError("database is locked")

    def query(self, *args, **kwargs):
        raise SQLAlchemyError("database is locked")

    def commit(self) -> None:
        pass

    def rollback(self) -> None:
        self.rolled_back = True

    def close(self) -> None:
        self.closed = True


def test_sql_errors_surface_as_store_errors(monkeypatch) -> None:
    store = SqlTaskStore("sqlite://", latency_scale=0, seed=False)
    session = _FailingSession()
    monkeypatch.setattr(store, "_session_factory", lambda: session)

    with pytest.raises(TaskStoreError) as excinfo:
        asyncio.run(store.list())

    assert isinstance(excinfo.value.cause, SQLAlchemyError)
    assert session.rolled_back
    assert session.closed

    result = asyncio.run(TaskActions(store).create({"title": "Buy milk"}))
    assert result.success is False
    assert result.kind == ErrorKind.INTERNAL
    assert result.error == CREATE_FAILED
