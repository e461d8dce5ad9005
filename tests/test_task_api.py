from __future__ import annotations


def test_list_and_stats(client) -> None:
    resp = client.get("/api/tasks")
    assert resp.status_code == 200
    data = resp.json()
    assert [item["id"] for item in data] == ["1", "2", "3"]
    assert data[0]["status"] == "in-progress"
    assert "created_at" in data[0]

    stats = client.get("/api/tasks/stats").json()
    assert stats == {"total": 3, "pending": 1, "in_progress": 1, "completed": 1}


def test_list_filtered_by_status(client) -> None:
    data = client.get("/api/tasks", params={"status": "pending"}).json()
    assert [item["id"] for item in data] == ["2"]


def test_get_task(client) -> None:
    assert client.get("/api/tasks/3").json()["title"] == "Update dependencies"
    assert client.get("/api/tasks/nope").status_code == 404


def test_create_task(client) -> None:
    resp = client.post("/api/tasks", json={"title": "  Buy milk  ", "status": "pending", "priority": "low"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    created = client.get(f"/api/tasks/{body['task_id']}").json()
    assert created["title"] == "Buy milk"
    assert client.get("/api/tasks").json()[0]["id"] == body["task_id"]


def test_create_task_requires_title(client) -> None:
    resp = client.post("/api/tasks", json={"title": "   "})

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Title is required", "kind": "validation"}


def test_update_task(client) -> None:
    resp = client.put("/api/tasks/1", json={"title": "Docs", "status": "completed"})
    assert resp.status_code == 200
    task = client.get("/api/tasks/1").json()
    assert task["title"] == "Docs"
    assert task["status"] == "completed"
    assert task["priority"] == "high"


def test_update_missing_task_is_404(client) -> None:
    resp = client.put("/api/tasks/nonexistent-id", json={"title": "x"})

    assert resp.status_code == 404
    assert resp.json()["kind"] == "not_found"


def test_delete_task(client) -> None:
    assert client.delete("/api/tasks/2").json() == {"success": True, "task_id": "2"}
    assert client.delete("/api/tasks/2").status_code == 404
    assert client.get("/api/tasks/stats").json()["total"] == 2


def test_toggle_task(client) -> None:
    resp = client.post("/api/tasks/3/toggle", json={"current_status": "completed"})
    assert resp.status_code == 200
    assert client.get("/api/tasks/3").json()["status"] == "pending"
