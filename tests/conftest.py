import pytest
from fastapi.testclient import TestClient

from taskflow.adapters.task_store_memory import MemoryTaskStore
from taskflow.app.deps import get_task_store
from taskflow.main import app


@pytest.fixture
def store() -> MemoryTaskStore:
    return MemoryTaskStore(latency_scale=0)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_task_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
