"""
Test suite for TaskService against an in-memory database.

Verifies the column ordering invariant across create, move, status
change and delete, plus criteria progress and dependency rules.

System role: Verification of task use cases
"""

import uuid

import pytest

from vtasker.application.services.board_service import BoardService
from vtasker.application.services.task_service import TASK_MOVED_ACTION, TaskService
from vtasker.boundary.db.CRUD.audit_log_crud import audit_log_crud
from vtasker.core.access import BoardRole
from vtasker.core.exceptions import (
    DependencyConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

TODO, IN_PROGRESS, DONE = 1, 2, 4


def task_data(title: str, board_id=None, status_id: int = TODO, **extra) -> dict:
    return {
        "title": title,
        "description": f"{title} description",
        "status_id": status_id,
        "priority_id": 2,
        "type_id": 1,
        "board_id": board_id,
        **extra,
    }


@pytest.fixture
def task_service(test_async_db) -> TaskService:
    return TaskService(test_async_db)


@pytest.fixture
async def board(test_async_db, owner) -> dict:
    return await BoardService(test_async_db).create_board(owner.id, "Sprint Board")


async def column(task_service: TaskService, user_id, board_id, status_id: int) -> list[tuple[str, int]]:
    tasks = await task_service.list_tasks(user_id, board_id=board_id, status_id=status_id)
    return [(t["title"], t["order_index"]) for t in tasks]


class TestCreateTask:
    """Test suite for TaskService.create_task()."""

    @pytest.mark.asyncio
    async def test_create_should_append_to_column(self, task_service, owner, board) -> None:
        for title in ("A", "B", "C"):
            await task_service.create_task(owner.id, task_data(title, board["id"]))

        assert await column(task_service, owner.id, board["id"], TODO) == [("A", 0), ("B", 1), ("C", 2)]

    @pytest.mark.asyncio
    async def test_create_should_store_content_and_criteria(self, task_service, owner, board) -> None:
        data = task_data(
            "With content",
            board["id"],
            labels=["backend"],
            content={
                "implementation_details": "use a queue",
                "assignee": owner.id,
                "acceptance_criteria": [
                    {"description": "first"},
                    {"description": "second", "category": "qa"},
                ],
            },
        )

        task = await task_service.create_task(owner.id, data)

        assert task["labels"] == ["backend"]
        assert task["content"]["implementation_details"] == "use a queue"
        assert task["content"]["assignee"] == owner.id
        assert [c["order"] for c in task["content"]["acceptance_criteria"]] == [0, 1]
        assert task["progress"] == {"total": 2, "completed": 0, "percentage": 0}

    @pytest.mark.asyncio
    async def test_create_should_reject_unknown_lookup(self, task_service, owner) -> None:
        with pytest.raises(ValidationError, match="invalid status"):
            await task_service.create_task(owner.id, task_data("Bad", status_id=99))

    @pytest.mark.asyncio
    async def test_create_should_reject_unknown_dependency(self, task_service, owner) -> None:
        with pytest.raises(ValidationError, match="invalid dependency"):
            await task_service.create_task(owner.id, task_data("Bad", dependencies=[uuid.uuid4()]))

    @pytest.mark.asyncio
    async def test_create_should_reject_blank_title(self, task_service, owner) -> None:
        with pytest.raises(ValidationError, match="title cannot be empty"):
            await task_service.create_task(owner.id, task_data("   "))

    @pytest.mark.asyncio
    async def test_viewer_should_not_create_on_board(
        self, test_async_db, task_service, owner, other_user, board
    ) -> None:
        await BoardService(test_async_db).add_member(owner.id, board["id"], other_user.id, BoardRole.VIEWER)

        with pytest.raises(PermissionDeniedError):
            await task_service.create_task(other_user.id, task_data("Nope", board["id"]))


class TestMoveTask:
    """Test suite for TaskService.move_task()."""

    @pytest.mark.asyncio
    async def test_move_to_other_column_should_close_and_open_gaps(self, task_service, owner, board) -> None:
        ids = {}
        for title in ("A", "B", "C"):
            ids[title] = (await task_service.create_task(owner.id, task_data(title, board["id"])))["id"]
        await task_service.create_task(owner.id, task_data("X", board["id"], status_id=IN_PROGRESS))

        result = await task_service.move_task(owner.id, ids["B"], IN_PROGRESS, 0)

        assert result == {"task_id": ids["B"], "status_id": IN_PROGRESS, "order": 0}
        assert await column(task_service, owner.id, board["id"], TODO) == [("A", 0), ("C", 1)]
        assert await column(task_service, owner.id, board["id"], IN_PROGRESS) == [("B", 0), ("X", 1)]

    @pytest.mark.asyncio
    async def test_move_within_column_should_reorder(self, task_service, owner, board) -> None:
        ids = {}
        for title in ("A", "B", "C"):
            ids[title] = (await task_service.create_task(owner.id, task_data(title, board["id"])))["id"]

        await task_service.move_task(owner.id, ids["A"], TODO, 2)

        assert await column(task_service, owner.id, board["id"], TODO) == [("B", 0), ("C", 1), ("A", 2)]

    @pytest.mark.asyncio
    async def test_move_past_end_should_clamp(self, task_service, owner, board) -> None:
        task = await task_service.create_task(owner.id, task_data("A", board["id"]))
        await task_service.create_task(owner.id, task_data("Y", board["id"], status_id=DONE))

        result = await task_service.move_task(owner.id, task["id"], DONE, 40)

        assert result["order"] == 1

    @pytest.mark.asyncio
    async def test_move_should_record_audit_entry(self, test_async_db, task_service, owner, board) -> None:
        task = await task_service.create_task(owner.id, task_data("A", board["id"]))

        await task_service.move_task(owner.id, task["id"], DONE, 0, type_code="bug", comment="shipped")

        (entry,) = await audit_log_crud.list_for_entity(test_async_db, task["id"])
        assert entry.action == TASK_MOVED_ACTION
        assert entry.details["from_status"] == TODO
        assert entry.details["to_status"] == DONE
        assert entry.details["comment"] == "shipped"
        assert (await task_service.get_task(owner.id, task["id"]))["type_id"] == 2

    @pytest.mark.asyncio
    async def test_move_should_reject_unknown_status_or_type(self, task_service, owner, board) -> None:
        task = await task_service.create_task(owner.id, task_data("A", board["id"]))

        with pytest.raises(ValidationError, match="invalid status"):
            await task_service.move_task(owner.id, task["id"], 42, 0)
        with pytest.raises(ValidationError, match="invalid task type"):
            await task_service.move_task(owner.id, task["id"], DONE, 0, type_code="epic")

    @pytest.mark.asyncio
    async def test_move_missing_task_should_raise_not_found(self, task_service, owner) -> None:
        with pytest.raises(NotFoundError):
            await task_service.move_task(owner.id, uuid.uuid4(), DONE, 0)


class TestUpdateTask:
    """Test suite for TaskService.update_task()."""

    @pytest.mark.asyncio
    async def test_status_change_should_append_to_new_column(self, task_service, owner, board) -> None:
        a = await task_service.create_task(owner.id, task_data("A", board["id"]))
        await task_service.create_task(owner.id, task_data("B", board["id"]))
        await task_service.create_task(owner.id, task_data("D", board["id"], status_id=DONE))

        updated = await task_service.update_task(owner.id, a["id"], {"status_id": DONE, "title": "A2"})

        assert updated["title"] == "A2"
        assert await column(task_service, owner.id, board["id"], TODO) == [("B", 0)]
        assert await column(task_service, owner.id, board["id"], DONE) == [("D", 0), ("A2", 1)]

    @pytest.mark.asyncio
    async def test_criteria_should_be_edited_in_place_or_appended(self, task_service, owner) -> None:
        task = await task_service.create_task(
            owner.id, task_data("A", content={"acceptance_criteria": [{"description": "first"}]})
        )
        first_id = task["content"]["acceptance_criteria"][0]["id"]

        updated = await task_service.update_task(
            owner.id,
            task["id"],
            {"content": {"acceptance_criteria": [
                {"id": first_id, "description": "first, edited"},
                {"description": "second"},
            ]}},
        )

        criteria = updated["content"]["acceptance_criteria"]
        assert [(c["description"], c["order"]) for c in criteria] == [("first, edited", 0), ("second", 1)]

    @pytest.mark.asyncio
    async def test_self_dependency_should_be_rejected(self, task_service, owner) -> None:
        task = await task_service.create_task(owner.id, task_data("A"))

        with pytest.raises(ValidationError):
            await task_service.update_task(owner.id, task["id"], {"dependencies": [task["id"]]})

    @pytest.mark.asyncio
    async def test_update_should_strip_title_and_reject_blank(self, task_service, owner) -> None:
        task = await task_service.create_task(owner.id, task_data("A"))

        updated = await task_service.update_task(owner.id, task["id"], {"title": "  Renamed  "})
        assert updated["title"] == "Renamed"

        with pytest.raises(ValidationError, match="title cannot be empty"):
            await task_service.update_task(owner.id, task["id"], {"title": "   "})


class TestCriteriaAndDelete:
    @pytest.mark.asyncio
    async def test_toggle_should_update_progress(self, task_service, owner) -> None:
        task = await task_service.create_task(
            owner.id,
            task_data("A", content={"acceptance_criteria": [
                {"description": "one"}, {"description": "two"}, {"description": "three"},
            ]}),
        )
        criterion_id = task["content"]["acceptance_criteria"][0]["id"]

        toggled = await task_service.toggle_criterion(owner.id, task["id"], criterion_id)
        assert toggled["progress"] == {"total": 3, "completed": 1, "percentage": 33}
        assert toggled["content"]["acceptance_criteria"][0]["completed_by"] == owner.id

        untoggled = await task_service.toggle_criterion(owner.id, task["id"], criterion_id)
        assert untoggled["progress"]["completed"] == 0
        assert untoggled["content"]["acceptance_criteria"][0]["completed_at"] is None

    @pytest.mark.asyncio
    async def test_delete_should_refuse_when_dependents_exist(self, task_service, owner) -> None:
        base = await task_service.create_task(owner.id, task_data("Base"))
        await task_service.create_task(owner.id, task_data("Dependent", dependencies=[base["id"]]))

        with pytest.raises(DependencyConflictError) as exc_info:
            await task_service.delete_task(owner.id, base["id"])
        assert exc_info.value.dependent_count == 1

    @pytest.mark.asyncio
    async def test_delete_should_close_gap(self, task_service, owner, board) -> None:
        ids = {}
        for title in ("A", "B", "C"):
            ids[title] = (await task_service.create_task(owner.id, task_data(title, board["id"])))["id"]

        await task_service.delete_task(owner.id, ids["A"])

        assert await column(task_service, owner.id, board["id"], TODO) == [("B", 0), ("C", 1)]
        with pytest.raises(NotFoundError):
            await task_service.get_task(owner.id, ids["A"])


class TestLookups:
    @pytest.mark.asyncio
    async def test_lookups_should_be_seeded_in_display_order(self, task_service) -> None:
        statuses = await task_service.list_statuses()
        priorities = await task_service.list_priorities()
        types = await task_service.list_types()

        assert [s["code"] for s in statuses] == ["todo", "in_progress", "in_review", "done"]
        assert [p["code"] for p in priorities] == ["low", "medium", "high"]
        assert {t["code"] for t in types} >= {"feature", "bug"}


class TestBoardScenario:
    """Register, sign in, create a board and a task, then move it."""

    @pytest.mark.asyncio
    async def test_end_to_end(self, test_async_db) -> None:
        from vtasker.application.services.auth_service import AuthService

        auth = AuthService(test_async_db)
        await auth.sign_up("flow@example.com", "password123", "Flo")
        signed_in = await auth.sign_in("flow@example.com", "password123", remember_me=True)
        current = await auth.authenticate(signed_in["token"])

        board = await BoardService(test_async_db).create_board(current.id, "Launch")
        service = TaskService(test_async_db)
        task = await service.create_task(current.id, task_data("Write docs", board["id"]))
        moved = await service.move_task(current.id, task["id"], IN_PROGRESS, 0)

        detail = await BoardService(test_async_db).get_board_by_slug(current.id, "launch")
        assert moved["status_id"] == IN_PROGRESS
        assert [(t["title"], t["status_id"], t["order_index"]) for t in detail["tasks"]] == [
            ("Write docs", IN_PROGRESS, 0)
        ]
