def test_create_completed_task_stamps_completed_at(client):
    resp = client.post("/api/tasks", json={"title": "Submit quarterly report", "status": "completed"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["completedAt"] is not None
    assert body["priority"] == "medium"


def test_create_pending_task_has_no_completed_at(client):
    resp = client.post("/api/tasks", json={
        "title": "Draft ToR", "completedAt": "2024-01-01T00:00:00", "projectId": "proj-1",
    })
    assert resp.status_code == 201
    assert resp.json()["status"] == "pending"
    assert resp.json()["completedAt"] is None


def test_completing_a_task_stamps_then_reopening_clears(client):
    done = client.put("/api/tasks/task-1", json={"status": "completed"}).json()
    assert done["completedAt"] is not None

    reopened = client.put("/api/tasks/task-1", json={"status": "pending"}).json()
    assert reopened["completedAt"] is None


def test_already_completed_task_keeps_its_completion_time(client):
    resp = client.put("/api/tasks/task-2", json={"status": "completed", "title": "Staff training wrap-up"})
    assert resp.status_code == 200
    assert resp.json()["completedAt"].startswith("2024-03-10")


def test_caller_supplied_completed_at_wins(client):
    resp = client.put("/api/tasks/task-1", json={"status": "completed", "completedAt": "2024-03-14T09:30:00Z"})
    assert resp.json()["completedAt"].startswith("2024-03-14T09:30:00")


def test_invalid_priority_rejected(client):
    resp = client.post("/api/tasks", json={"title": "x", "priority": "urgent"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid task data"


def test_filters(client):
    client.post("/api/tasks", json={"title": "Field visit", "projectId": "proj-2", "assigneeId": "emp-2"})

    by_project = client.get("/api/tasks", params={"projectId": "proj-2"}).json()
    assert len(by_project) == 2

    both = client.get("/api/tasks", params={"projectId": "proj-2", "assigneeId": "emp-2"}).json()
    assert [t["title"] for t in both] == ["Field visit"]

    by_assignee = client.get("/api/tasks", params={"assigneeId": "emp-1"}).json()
    assert [t["id"] for t in by_assignee] == ["task-1"]


def test_task_not_found(client):
    assert client.get("/api/tasks/nope").json() == {"message": "Task not found"}
    assert client.delete("/api/tasks/nope").status_code == 404
