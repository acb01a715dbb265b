"""
Tests for project, issue, board and user endpoints.

System role: Verification of resource HTTP contracts
"""

import uuid
from datetime import datetime, timezone

from vtasker.api.deps.dependencies import (
    get_board_service,
    get_issue_service,
    get_project_service,
    get_user_service,
)
from vtasker.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

NOW = datetime.now(timezone.utc)


def project_payload(**overrides) -> dict:
    data = {
        "id": uuid.uuid4(),
        "name": "Website",
        "description": None,
        "created_by": uuid.uuid4(),
        "is_archived": False,
        "issue_count": 2,
        "open_issue_count": 1,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return data


def issue_payload(**overrides) -> dict:
    data = {
        "id": uuid.uuid4(),
        "title": "Broken link",
        "description": None,
        "status": "todo",
        "priority": "high",
        "project_id": uuid.uuid4(),
        "project_name": "Website",
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return data


def board_payload(**overrides) -> dict:
    data = {
        "id": uuid.uuid4(),
        "name": "Sprint",
        "slug": "sprint",
        "description": None,
        "owner_id": uuid.uuid4(),
        "is_public": False,
        "members": [],
        "tasks": [],
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return data


class TestProjects:
    def test_create_should_reject_whitespace_name(self, client, mock_service):
        client.app.dependency_overrides[get_project_service] = lambda: mock_service

        response = client.post("/api/v1/projects", json={"name": "   "})

        assert response.status_code == 400
        mock_service.create_project.assert_not_called()

    def test_create_should_set_creator(self, client, mock_service, current_user):
        mock_service.create_project.return_value = project_payload(created_by=current_user.id)
        client.app.dependency_overrides[get_project_service] = lambda: mock_service

        response = client.post("/api/v1/projects", json={"name": "Website"})

        assert response.status_code == 201
        assert mock_service.create_project.call_args.kwargs["created_by"] == current_user.id

    def test_list_should_paginate(self, client, mock_service):
        mock_service.list_projects.return_value = {
            "projects": [project_payload()],
            "total": 11,
            "page": 2,
            "page_size": 10,
        }
        client.app.dependency_overrides[get_project_service] = lambda: mock_service

        response = client.get("/api/v1/projects", params={"page": 2})

        assert response.status_code == 200
        assert response.json()["total"] == 11
        mock_service.list_projects.assert_awaited_once_with(page=2, page_size=10)

    def test_update_archived_should_return_404(self, client, mock_service):
        mock_service.update_project.side_effect = NotFoundError("project")
        client.app.dependency_overrides[get_project_service] = lambda: mock_service

        response = client.patch(f"/api/v1/projects/{uuid.uuid4()}", json={"name": "x"})

        assert response.status_code == 404

    def test_delete_should_archive(self, client, mock_service):
        project_id = uuid.uuid4()
        client.app.dependency_overrides[get_project_service] = lambda: mock_service

        assert client.delete(f"/api/v1/projects/{project_id}").status_code == 204
        mock_service.archive_project.assert_awaited_once_with(project_id)


class TestIssues:
    def test_create_with_unknown_project_should_return_400(self, client, mock_service):
        mock_service.create_issue.side_effect = ValidationError("invalid project")
        client.app.dependency_overrides[get_issue_service] = lambda: mock_service

        response = client.post(
            "/api/v1/issues",
            json={"title": "t", "priority": "low", "project_id": str(uuid.uuid4())},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "invalid project"

    def test_create_should_reject_unknown_priority(self, client, mock_service):
        client.app.dependency_overrides[get_issue_service] = lambda: mock_service

        response = client.post(
            "/api/v1/issues",
            json={"title": "t", "priority": "urgent", "project_id": str(uuid.uuid4())},
        )

        assert response.status_code == 422

    def test_list_should_map_status_query(self, client, mock_service):
        mock_service.list_issues.return_value = {
            "items": [issue_payload()],
            "total": 1,
            "page": 1,
            "page_size": 10,
            "total_pages": 1,
        }
        client.app.dependency_overrides[get_issue_service] = lambda: mock_service

        response = client.get("/api/v1/issues", params={"status": "todo", "search": "link"})

        assert response.status_code == 200
        filters = mock_service.list_issues.call_args.args[0]
        assert filters.status == "todo"
        assert filters.search == "link"

    def test_put_and_patch_should_both_update(self, client, mock_service):
        issue_id = uuid.uuid4()
        mock_service.update_issue.return_value = issue_payload(id=issue_id, status="done")
        client.app.dependency_overrides[get_issue_service] = lambda: mock_service

        assert client.put(f"/api/v1/issues/{issue_id}", json={"status": "done"}).status_code == 200
        assert client.patch(f"/api/v1/issues/{issue_id}", json={"assignee_id": None}).status_code == 200
        assert mock_service.update_issue.call_args.args[1] == {"assignee_id": None}


class TestBoards:
    def test_create_should_forward_members(self, client, mock_service, current_user):
        member_id = uuid.uuid4()
        mock_service.create_board.return_value = board_payload(owner_id=current_user.id)
        client.app.dependency_overrides[get_board_service] = lambda: mock_service

        response = client.post(
            "/api/v1/boards",
            json={"name": "Sprint", "members": [{"user_id": str(member_id), "role": "editor"}]},
        )

        assert response.status_code == 201
        members = mock_service.create_board.call_args.kwargs["members"]
        assert members == [{"user_id": member_id, "role": "editor"}]

    def test_get_by_slug_should_not_hit_id_route(self, client, mock_service):
        mock_service.get_board_by_slug.return_value = board_payload()
        client.app.dependency_overrides[get_board_service] = lambda: mock_service

        response = client.get("/api/v1/boards/b/sprint")

        assert response.status_code == 200
        mock_service.get_board.assert_not_called()

    def test_forbidden_board_should_return_403(self, client, mock_service):
        mock_service.get_board.side_effect = PermissionDeniedError("You do not have access to this board")
        client.app.dependency_overrides[get_board_service] = lambda: mock_service

        response = client.get(f"/api/v1/boards/{uuid.uuid4()}")

        assert response.status_code == 403

    def test_duplicate_member_should_return_409(self, client, mock_service):
        mock_service.add_member.side_effect = ConflictError("User is already a member of this board")
        client.app.dependency_overrides[get_board_service] = lambda: mock_service

        response = client.post(
            f"/api/v1/boards/{uuid.uuid4()}/members",
            json={"user_id": str(uuid.uuid4()), "role": "viewer"},
        )

        assert response.status_code == 409


class TestUsers:
    def test_me_should_use_caller_id(self, client, mock_service, current_user):
        mock_service.get_user.return_value = {
            "id": current_user.id,
            "email": current_user.email,
            "name": "Caller",
            "created_at": NOW,
            "updated_at": NOW,
        }
        client.app.dependency_overrides[get_user_service] = lambda: mock_service

        response = client.get("/api/v1/users/me")

        assert response.status_code == 200
        mock_service.get_user.assert_awaited_once_with(current_user.id, current_user.id)

    def test_other_profile_should_return_403(self, client, mock_service):
        mock_service.update_user.side_effect = PermissionDeniedError("You can only access your own profile")
        client.app.dependency_overrides[get_user_service] = lambda: mock_service

        response = client.patch(f"/api/v1/users/{uuid.uuid4()}", json={"name": "x"})

        assert response.status_code == 403

    def test_short_password_should_return_422(self, client, mock_service, current_user):
        client.app.dependency_overrides[get_user_service] = lambda: mock_service

        response = client.patch(f"/api/v1/users/{current_user.id}", json={"password": "short"})

        assert response.status_code == 422

    def test_preferences_round_trip(self, client, mock_service, current_user):
        merged = {
            "theme": "dark",
            "notifications": {"email": True, "taskReminders": False, "projectUpdates": False},
        }
        mock_service.update_preferences.return_value = merged
        client.app.dependency_overrides[get_user_service] = lambda: mock_service

        response = client.patch("/api/v1/user/preferences", json={"theme": "dark", "notifications": {"email": True}})

        assert response.status_code == 200
        assert response.json() == merged
        mock_service.update_preferences.assert_awaited_once_with(
            current_user.id, {"theme": "dark", "notifications": {"email": True}}
        )
