"""
PocketTasks AI - Task Endpoint Tests
"""

import asyncio

import pytest


async def _seed(session):
    await session.add_tasks(["Buy milk"])
    walk = (await session.add_tasks(["Walk dog"]))[0]
    await session.add_tasks(["Call mom"])
    await session.toggle(walk.id)
    session.recorder.clear()


@pytest.fixture
def seeded(session):
    """Three tasks, newest first: Call mom, Walk dog (completed), Buy milk."""
    asyncio.run(_seed(session))
    return session.list_tasks()


class TestListTasks:

    def test_empty_list(self, client):
        response = client.get("/tasks")

        assert response.status_code == 200
        assert response.json() == {"tasks": [], "total": 0, "completed": 0, "remaining": 0}

    def test_list_with_counts(self, client, seeded):
        data = client.get("/tasks").json()

        assert [t["text"] for t in data["tasks"]] == ["Call mom", "Walk dog", "Buy milk"]
        assert data["total"] == 3
        assert data["completed"] == 1
        assert data["remaining"] == 2

    def test_get_task(self, client, seeded):
        response = client.get(f"/tasks/{seeded[1].id}")

        assert response.status_code == 200
        assert response.json() == {"id": seeded[1].id, "text": "Walk dog", "completed": True}

    def test_get_unknown_task(self, client):
        assert client.get("/tasks/nope").status_code == 404


class TestCountTasks:

    def test_default_is_total(self, client, seeded):
        data = client.get("/tasks/count").json()
        assert data["message"] == "You currently have 3 tasks in total: 1 completed and 2 remaining."

    def test_remaining(self, client, seeded):
        data = client.get("/tasks/count", params={"subtype": "remaining"}).json()
        assert data["message"] == "You have 2 tasks remaining out of 3 (1 completed)."
        assert data["remaining"] == 2

    def test_empty_list(self, client):
        data = client.get("/tasks/count", params={"subtype": "completed"}).json()
        assert data["message"] == "You currently have no tasks."

    def test_invalid_subtype(self, client):
        assert client.get("/tasks/count", params={"subtype": "overdue"}).status_code == 422


class TestBulkEndpoints:

    def test_clear(self, client, seeded, session):
        response = client.delete("/tasks")

        data = response.json()
        assert response.status_code == 200
        assert data["changed"] is True
        assert data["feedback"]["title"] == "List Cleared"
        assert data["tasks"] == []
        assert session.list_tasks() == []

    def test_clear_empty_list(self, client):
        data = client.delete("/tasks").json()
        assert data["changed"] is False
        assert data["feedback"] == {"title": "List is already empty", "description": "There are no tasks to remove."}

    def test_complete_all(self, client, seeded):
        data = client.post("/tasks/complete-all").json()

        assert data["changed"] is True
        assert data["feedback"]["title"] == "All Tasks Completed!"
        assert all(t["completed"] for t in data["tasks"])

    def test_complete_all_twice(self, client, seeded):
        client.post("/tasks/complete-all")
        data = client.post("/tasks/complete-all").json()

        assert data["changed"] is False
        assert data["feedback"]["title"] == "All tasks already completed"

    def test_complete_all_on_empty_list(self, client):
        data = client.post("/tasks/complete-all").json()
        assert data["feedback"] == {"title": "No tasks to complete", "description": "Your list is empty."}


class TestSingleTaskEndpoints:

    def test_toggle(self, client, seeded):
        response = client.post(f"/tasks/{seeded[0].id}/toggle")

        data = response.json()
        assert response.status_code == 200
        assert data["task"]["completed"] is True
        assert data["feedback"]["title"] == "Task completed!"

    def test_toggle_unknown_task(self, client):
        assert client.post("/tasks/nope/toggle").status_code == 404

    def test_update_text(self, client, seeded):
        response = client.patch(f"/tasks/{seeded[2].id}", json={"text": "Buy oat milk"})

        data = response.json()
        assert response.status_code == 200
        assert data["task"]["text"] == "Buy oat milk"
        assert data["feedback"]["description"] == '"Buy milk" changed to "Buy oat milk".'

    def test_update_with_blank_text(self, client, seeded, session):
        """Blank text is rejected and the task keeps its text."""
        response = client.patch(f"/tasks/{seeded[2].id}", json={"text": "   "})

        assert response.status_code == 422
        assert session.get(seeded[2].id).text == "Buy milk"

    def test_update_unknown_task(self, client):
        assert client.patch("/tasks/nope", json={"text": "Anything"}).status_code == 404

    def test_delete(self, client, seeded, session):
        response = client.delete(f"/tasks/{seeded[0].id}")

        assert response.status_code == 200
        assert response.json()["feedback"]["title"] == "Task deleted"
        assert [t.text for t in session.list_tasks()] == ["Walk dog", "Buy milk"]

    def test_delete_unknown_task(self, client):
        assert client.delete("/tasks/nope").status_code == 404

    def test_add_subtasks(self, client, seeded, session):
        response = client.post(
            f"/tasks/{seeded[2].id}/subtasks",
            json={"subTasks": ["Check fridge", "Go to store"]},
        )

        assert response.status_code == 201
        data = response.json()
        assert [t["text"] for t in data["createdTasks"]] == [
            'Sub-task for "Buy milk": Check fridge',
            'Sub-task for "Buy milk": Go to store',
        ]
        assert data["feedback"]["title"] == "Sub-tasks added!"
        assert len(session.list_tasks()) == 5

    def test_add_blank_subtasks(self, client, seeded):
        response = client.post(f"/tasks/{seeded[2].id}/subtasks", json={"subTasks": ["  "]})
        assert response.status_code == 422

    def test_add_subtasks_to_unknown_task(self, client):
        response = client.post("/tasks/nope/subtasks", json={"subTasks": ["Step"]})
        assert response.status_code == 404


class TestTaskEvents:

    def test_events_follow_mutations(self, client, seeded):
        task_id = seeded[0].id
        client.post(f"/tasks/{task_id}/toggle")
        client.patch(f"/tasks/{task_id}", json={"text": "Call dad"})
        client.delete(f"/tasks/{task_id}")

        data = client.get("/tasks/events").json()

        assert data["total"] == 3
        assert [e["event_type"] for e in data["events"]] == ["completed", "text_updated", "deleted"]
        updated = data["events"][1]
        assert updated["task_text"] == "Call mom"
        assert updated["new_text"] == "Call dad"
        assert all(e["task_id"] == task_id for e in data["events"])
