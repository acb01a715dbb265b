"""
Tests for task and lookup endpoints.

System role: Verification of task HTTP contracts
"""

import uuid
from datetime import datetime, timezone

from vtasker.api.deps.dependencies import get_task_service
from vtasker.core.exceptions import DependencyConflictError, NotFoundError, ValidationError


def task_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    data = {
        "id": uuid.uuid4(),
        "title": "Write docs",
        "description": "Explain the board",
        "status_id": 1,
        "priority_id": 2,
        "type_id": 1,
        "order_index": 0,
        "owner_id": uuid.uuid4(),
        "board_id": None,
        "parent_id": None,
        "labels": ["docs"],
        "dependencies": [],
        "content": {
            "description": "Explain the board",
            "acceptance_criteria": [
                {"id": uuid.uuid4(), "description": "covers moves", "completed": True, "order": 0},
                {"id": uuid.uuid4(), "description": "covers lookups", "completed": False, "order": 1},
            ],
            "attachments": [],
        },
        "progress": {"total": 2, "completed": 1, "percentage": 50},
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


def test_create_task_should_return_201(client, mock_service, current_user):
    mock_service.create_task.return_value = task_payload()
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.post(
        "/api/v1/tasks",
        json={
            "title": "Write docs",
            "description": "Explain the board",
            "labels": ["docs"],
            "content": {"acceptance_criteria": [{"description": "covers moves"}]},
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["progress"]["percentage"] == 50
    assert len(body["content"]["acceptance_criteria"]) == 2
    user_id, data = mock_service.create_task.call_args.args
    assert user_id == current_user.id
    assert data["content"]["acceptance_criteria"][0]["description"] == "covers moves"
    assert data["status_id"] == 1


def test_create_task_should_reject_blank_title(client, mock_service):
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.post("/api/v1/tasks", json={"title": "   ", "description": "x"})

    assert response.status_code == 400
    mock_service.create_task.assert_not_called()


def test_create_task_should_limit_labels(client, mock_service):
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.post(
        "/api/v1/tasks",
        json={"title": "t", "description": "d", "labels": [f"l{i}" for i in range(21)]},
    )

    assert response.status_code == 400


def test_list_tasks_should_forward_filters(client, mock_service, current_user):
    board_id = uuid.uuid4()
    mock_service.list_tasks.return_value = [task_payload(board_id=board_id)]
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.get("/api/v1/tasks", params={"board_id": str(board_id), "status_id": 1})

    assert response.status_code == 200
    assert len(response.json()) == 1
    mock_service.list_tasks.assert_awaited_once_with(
        current_user.id, board_id=board_id, status_id=1, priority_id=None, type_id=None
    )


def test_get_task_missing_should_return_404(client, mock_service):
    mock_service.get_task.side_effect = NotFoundError("task")
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.get(f"/api/v1/tasks/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found"


def test_get_task_with_malformed_id_should_return_422(client, mock_service):
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.get("/api/v1/tasks/not-a-uuid")

    assert response.status_code == 422


def test_update_task_should_send_only_set_fields(client, mock_service):
    task_id = uuid.uuid4()
    mock_service.update_task.return_value = task_payload(id=task_id, title="Renamed")
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.put(f"/api/v1/tasks/{task_id}", json={"title": "Renamed"})

    assert response.status_code == 200
    assert mock_service.update_task.call_args.args[2] == {"title": "Renamed"}


def test_move_task_should_return_confirmation(client, mock_service, current_user):
    task_id = uuid.uuid4()
    mock_service.move_task.return_value = {"task_id": task_id, "status_id": 2, "order": 0}
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.post(
        f"/api/v1/tasks/{task_id}/move",
        json={"status_id": 2, "order": 0, "type": "bug", "comment": "picked up"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "message": "Task moved successfully",
        "task_id": str(task_id),
        "status_id": 2,
        "order": 0,
    }
    mock_service.move_task.assert_awaited_once_with(
        current_user.id, task_id, status_id=2, order=0, type_code="bug", comment="picked up"
    )


def test_move_task_should_reject_negative_order(client, mock_service):
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.post(f"/api/v1/tasks/{uuid.uuid4()}/move", json={"status_id": 2, "order": -1})

    assert response.status_code == 422


def test_move_task_invalid_status_should_return_400(client, mock_service):
    mock_service.move_task.side_effect = ValidationError("invalid status")
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.post(f"/api/v1/tasks/{uuid.uuid4()}/move", json={"status_id": 9, "order": 0})

    assert response.status_code == 400
    assert response.json()["detail"] == "invalid status"


def test_toggle_criterion(client, mock_service):
    mock_service.toggle_criterion.return_value = task_payload()
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.post(f"/api/v1/tasks/{uuid.uuid4()}/criteria/{uuid.uuid4()}/toggle")

    assert response.status_code == 200


def test_delete_with_dependents_should_return_409(client, mock_service):
    task_id = uuid.uuid4()
    mock_service.delete_task.side_effect = DependencyConflictError(task_id, 3)
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    response = client.delete(f"/api/v1/tasks/{task_id}")

    assert response.status_code == 409
    assert response.json()["detail"]["dependent_count"] == 3


def test_delete_should_return_204(client, mock_service):
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    assert client.delete(f"/api/v1/tasks/{uuid.uuid4()}").status_code == 204


def test_lookups(client, mock_service):
    rows = [{"id": 1, "code": "todo", "name": "To Do", "display_order": 1}]
    mock_service.list_statuses.return_value = rows
    mock_service.list_priorities.return_value = rows
    mock_service.list_types.return_value = rows
    client.app.dependency_overrides[get_task_service] = lambda: mock_service

    for path in ("/api/v1/task-statuses", "/api/v1/task-priorities", "/api/v1/task-types"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json()[0]["code"] == "todo"
