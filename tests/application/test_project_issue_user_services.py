"""
Test suite for ProjectService, IssueService and UserService.

System role: Verification of project tracking and profile use cases
"""

import uuid

import pytest

from vtasker.application.services.issue_service import IssueService
from vtasker.application.services.project_service import ProjectService
from vtasker.application.services.user_service import UserService, merge_preferences
from vtasker.boundary.db.CRUD.issue_crud import IssueFilters
from vtasker.boundary.db.models.issue_model import IssuePriority, IssueStatus
from vtasker.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError


@pytest.fixture
def project_service(test_async_db) -> ProjectService:
    return ProjectService(test_async_db)


@pytest.fixture
def issue_service(test_async_db) -> IssueService:
    return IssueService(test_async_db)


@pytest.fixture
async def project(project_service, owner) -> dict:
    return await project_service.create_project("Website", "Marketing site", owner.id)


class TestProjectService:
    @pytest.mark.asyncio
    async def test_counts_should_track_open_issues(self, project_service, issue_service, project, owner) -> None:
        await issue_service.create_issue("Open one", IssuePriority.HIGH, project["id"], owner.id)
        await issue_service.create_issue(
            "Closed one", IssuePriority.LOW, project["id"], owner.id, status=IssueStatus.DONE
        )

        data = await project_service.get_project(project["id"])

        assert data["issue_count"] == 2
        assert data["open_issue_count"] == 1

    @pytest.mark.asyncio
    async def test_archived_project_should_disappear(self, project_service, project) -> None:
        await project_service.archive_project(project["id"])

        with pytest.raises(NotFoundError):
            await project_service.get_project(project["id"])
        listing = await project_service.list_projects(page=1, page_size=10)
        assert listing["total"] == 0

    @pytest.mark.asyncio
    async def test_update_should_ignore_none(self, project_service, project) -> None:
        updated = await project_service.update_project(project["id"], name="Web", description=None)

        assert updated["name"] == "Web"
        assert updated["description"] == "Marketing site"


class TestIssueService:
    @pytest.mark.asyncio
    async def test_create_should_validate_project_and_assignee(self, issue_service, project, owner) -> None:
        with pytest.raises(ValidationError, match="invalid project"):
            await issue_service.create_issue("x", IssuePriority.LOW, uuid.uuid4(), owner.id)
        with pytest.raises(ValidationError, match="invalid user"):
            await issue_service.create_issue(
                "x", IssuePriority.LOW, project["id"], owner.id, assignee_id=uuid.uuid4()
            )

    @pytest.mark.asyncio
    async def test_list_should_filter_and_paginate(self, issue_service, project, owner) -> None:
        for i in range(3):
            await issue_service.create_issue(f"Login bug {i}", IssuePriority.HIGH, project["id"], owner.id)
        await issue_service.create_issue("Footer colour", IssuePriority.LOW, project["id"], owner.id)

        page = await issue_service.list_issues(
            IssueFilters(project_id=project["id"], search="login"), page=1, page_size=2
        )

        assert page["total"] == 3
        assert page["total_pages"] == 2
        assert len(page["items"]) == 2
        assert page["items"][0]["project_name"] == "Website"

    @pytest.mark.asyncio
    async def test_search_should_match_wildcards_literally(self, issue_service, project, owner) -> None:
        await issue_service.create_issue("Discount shows 100% off", IssuePriority.HIGH, project["id"], owner.id)
        await issue_service.create_issue("Rename user_id column", IssuePriority.LOW, project["id"], owner.id)
        await issue_service.create_issue("Plain issue", IssuePriority.LOW, project["id"], owner.id)

        percent = await issue_service.list_issues(IssueFilters(search="%"), page=1, page_size=10)
        underscore = await issue_service.list_issues(IssueFilters(search="_"), page=1, page_size=10)

        assert [i["title"] for i in percent["items"]] == ["Discount shows 100% off"]
        assert [i["title"] for i in underscore["items"]] == ["Rename user_id column"]

    @pytest.mark.asyncio
    async def test_update_should_allow_clearing_assignee(self, issue_service, project, owner) -> None:
        issue = await issue_service.create_issue(
            "Assigned", IssuePriority.MEDIUM, project["id"], owner.id, assignee_id=owner.id
        )
        assert issue["assignee_name"] == "Olivia Owner"

        updated = await issue_service.update_issue(
            issue["id"], {"assignee_id": None, "status": IssueStatus.IN_PROGRESS, "title": None}
        )

        assert updated["assignee_id"] is None
        assert updated["status"] == IssueStatus.IN_PROGRESS
        assert updated["title"] == "Assigned"

    @pytest.mark.asyncio
    async def test_archived_issue_should_be_not_found(self, issue_service, project, owner) -> None:
        issue = await issue_service.create_issue("Gone", IssuePriority.LOW, project["id"], owner.id)

        await issue_service.archive_issue(issue["id"])

        with pytest.raises(NotFoundError):
            await issue_service.get_issue(issue["id"])


class TestUserService:
    @pytest.mark.asyncio
    async def test_other_profile_should_be_forbidden(self, test_async_db, owner, other_user) -> None:
        with pytest.raises(PermissionDeniedError, match="your own profile"):
            await UserService(test_async_db).get_user(owner.id, other_user.id)

    @pytest.mark.asyncio
    async def test_update_should_change_name_and_password(self, test_async_db, owner) -> None:
        from vtasker.core.security import verify_password

        service = UserService(test_async_db)
        updated = await service.update_user(owner.id, owner.id, name=" Liv ", password="new-password")

        assert updated["name"] == "Liv"
        assert verify_password("new-password", owner.password_hash)

    @pytest.mark.asyncio
    async def test_preferences_should_merge_with_defaults(self, test_async_db, owner) -> None:
        service = UserService(test_async_db)

        merged = await service.update_preferences(
            owner.id, {"theme": "dark", "notifications": {"email": True}}
        )

        assert merged == {
            "theme": "dark",
            "notifications": {"email": True, "taskReminders": False, "projectUpdates": False},
        }
        assert (await service.get_preferences(owner.id))["theme"] == "dark"

    def test_merge_should_ignore_none_values(self) -> None:
        merged = merge_preferences({"theme": "dark"}, {"theme": None})

        assert merged["theme"] == "dark"
