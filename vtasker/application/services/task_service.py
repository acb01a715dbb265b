"""
Task service orchestrator.

Coordinates task creation and editing, drag-and-drop moves between
status columns, acceptance criteria and lookups.

Column invariant: within one (board, status) column, order_index values
form the sequence 0..n-1. Create appends, move closes the gap in the old
column before opening one in the target column, delete closes its gap.

Dependencies: vtasker.boundary.db.CRUD, vtasker.application.services.board_service
System role: Task use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.application.services.board_service import load_board_access
from vtasker.application.services.task_mapping import task_to_dict
from vtasker.boundary.db.base import utcnow
from vtasker.boundary.db.CRUD.audit_log_crud import audit_log_crud
from vtasker.boundary.db.CRUD.board_crud import board_crud
from vtasker.boundary.db.CRUD.lookup_crud import (
    task_priority_crud,
    task_status_crud,
    task_type_crud,
)
from vtasker.boundary.db.CRUD.task_crud import criterion_crud, task_crud
from vtasker.boundary.db.CRUD.user_crud import user_crud
from vtasker.boundary.db.models.task_model import AcceptanceCriterionModel, TaskModel
from vtasker.core.exceptions import (
    DependencyConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

TASK_MOVED_ACTION = "task:moved"


def _lookup_dict(row) -> dict:
    return {"id": row.id, "code": row.code, "name": row.name, "display_order": row.display_order}


def _clean_title(title: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        raise ValidationError("title cannot be empty", field="title")
    return cleaned


class TaskService:
    """Task service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize task service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _load(self, task_id: UUID) -> TaskModel:
        task = await task_crud.get_with_details(self.db, task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        return task

    async def _check_view(self, task: TaskModel, user_id: UUID) -> None:
        if task.board_id is None:
            return
        _, access = await load_board_access(self.db, task.board_id, user_id)
        if not access.can_view():
            raise PermissionDeniedError("You do not have access to this task", {"task_id": str(task.id)})

    async def _check_edit(self, board_id: UUID | None, user_id: UUID) -> None:
        if board_id is None:
            return
        _, access = await load_board_access(self.db, board_id, user_id)
        if not access.can_edit():
            raise PermissionDeniedError("You cannot edit tasks on this board", {"board_id": str(board_id)})

    async def _validate_lookups(
        self,
        status_id: int | None = None,
        priority_id: int | None = None,
        type_id: int | None = None,
    ) -> None:
        if status_id is not None and await task_status_crud.get_by_id(self.db, status_id) is None:
            raise ValidationError("invalid status", field="status_id")
        if priority_id is not None and await task_priority_crud.get_by_id(self.db, priority_id) is None:
            raise ValidationError("invalid priority", field="priority_id")
        if type_id is not None and await task_type_crud.get_by_id(self.db, type_id) is None:
            raise ValidationError("invalid task type", field="type_id")

    async def _resolve_dependencies(self, ids: list[UUID], task_id: UUID | None = None) -> list[TaskModel]:
        unique = list(dict.fromkeys(ids))
        if task_id is not None and task_id in unique:
            raise ValidationError("A task cannot depend on itself", field="dependencies")
        tasks = await task_crud.get_many(self.db, unique)
        if len(tasks) != len(unique):
            raise ValidationError("invalid dependency", field="dependencies")
        return list(tasks)

    async def _check_user(self, user_id: UUID | None, field: str) -> None:
        if user_id is not None and not await user_crud.exists(self.db, user_id):
            raise ValidationError("invalid user", field=field)

    async def list_tasks(
        self,
        user_id: UUID,
        board_id: UUID | None = None,
        status_id: int | None = None,
        priority_id: int | None = None,
        type_id: int | None = None,
    ) -> list[dict]:
        """
        Tasks visible to the user, ordered by status then position.

        Without board_id, tasks on boards the user cannot view are left out.
        """
        if board_id is not None:
            _, access = await load_board_access(self.db, board_id, user_id)
            if not access.can_view():
                raise PermissionDeniedError("You do not have access to this board", {"board_id": str(board_id)})

        tasks = await task_crud.list_filtered(
            self.db,
            board_id=board_id,
            status_id=status_id,
            priority_id=priority_id,
            type_id=type_id,
        )
        if board_id is None:
            visible = {b.id for b in await board_crud.list_accessible(self.db, user_id)}
            tasks = [t for t in tasks if t.board_id is None or t.board_id in visible]
        return [task_to_dict(t) for t in tasks]

    async def get_task(self, user_id: UUID, task_id: UUID) -> dict:
        """
        Task with content, criteria, dependencies and progress.

        Raises:
            NotFoundError: Missing task
            PermissionDeniedError: Task is on a board the user cannot view
        """
        task = await self._load(task_id)
        await self._check_view(task, user_id)
        return task_to_dict(task)

    async def create_task(self, user_id: UUID, data: dict) -> dict:
        """
        Create a task at the end of its column.

        Args:
            user_id: Creating user, stored as owner
            data: CreateTaskRequest fields as a dict (content nested)

        Raises:
            ValidationError: Blank title, unknown lookup id, parent, dependency or assignee
            PermissionDeniedError: Caller cannot edit the target board
            NotFoundError: Target board does not exist
        """
        content = data.get("content") or {}
        board_id = data.get("board_id")

        await self._check_edit(board_id, user_id)
        title = _clean_title(data["title"])
        await self._validate_lookups(data["status_id"], data["priority_id"], data["type_id"])
        if data.get("parent_id") is not None and not await task_crud.exists(self.db, data["parent_id"]):
            raise ValidationError("invalid parent task", field="parent_id")
        dependencies = await self._resolve_dependencies(data.get("dependencies") or [])
        await self._check_user(content.get("assignee"), "assignee")

        try:
            order_index = await task_crud.next_order_index(self.db, board_id, data["status_id"])
            task = TaskModel(
                title=title,
                description=data["description"],
                status_id=data["status_id"],
                priority_id=data["priority_id"],
                type_id=data["type_id"],
                order_index=order_index,
                owner_id=user_id,
                board_id=board_id,
                parent_id=data.get("parent_id"),
                labels=list(data.get("labels") or []),
                implementation_details=content.get("implementation_details"),
                notes=content.get("notes"),
                attachments=list(content.get("attachments") or []),
                due_date=content.get("due_date"),
                assignee_id=content.get("assignee"),
                acceptance_criteria=[
                    AcceptanceCriterionModel(
                        description=c["description"],
                        category=c.get("category"),
                        notes=c.get("notes"),
                        order_index=c["order"] if c.get("order") is not None else i,
                    )
                    for i, c in enumerate(content.get("acceptance_criteria") or [])
                ],
                dependencies=dependencies,
            )
            self.db.add(task)
            await self.db.flush()
            task_id = task.id
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to create task", extra={"error": str(e), "title": data.get("title")})
            raise

        logger.info(
            "Task created",
            extra={
                "task_id": str(task_id),
                "board_id": str(board_id) if board_id else None,
                "status_id": data["status_id"],
                "order_index": order_index,
            },
        )
        return task_to_dict(await self._load(task_id))

    async def update_task(self, user_id: UUID, task_id: UUID, changes: dict) -> dict:
        """
        Partial update of a task and its content.

        Acceptance criteria with an id are edited in place; entries without
        an id are appended. A status change moves the task to the end of the
        new column.

        Raises:
            NotFoundError: Missing task or unknown criterion id
            ValidationError: Blank title, unknown lookup id, dependency or assignee
        """
        task = await self._load(task_id)
        await self._check_edit(task.board_id, user_id)
        if changes.get("title") is not None:
            changes = {**changes, "title": _clean_title(changes["title"])}
        await self._validate_lookups(
            changes.get("status_id"), changes.get("priority_id"), changes.get("type_id")
        )

        try:
            for field in ("title", "description", "priority_id", "type_id"):
                if changes.get(field) is not None:
                    setattr(task, field, changes[field])
            if changes.get("labels") is not None:
                task.labels = list(changes["labels"])
            if changes.get("dependencies") is not None:
                task.dependencies = await self._resolve_dependencies(changes["dependencies"], task.id)

            new_status = changes.get("status_id")
            if new_status is not None and new_status != task.status_id:
                await task_crud.shift_column(
                    self.db, task.board_id, task.status_id, task.order_index, -1,
                    exclude_id=task.id, inclusive=False,
                )
                task.order_index = await task_crud.column_size(
                    self.db, task.board_id, new_status, exclude_id=task.id
                )
                task.status_id = new_status

            content = changes.get("content")
            if content:
                await self._apply_content(task, content)

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to update task", extra={"error": str(e), "task_id": str(task_id)})
            raise

        logger.info("Task updated", extra={"task_id": str(task_id), "fields": sorted(k for k, v in changes.items() if v is not None)})
        return task_to_dict(await self._load(task_id))

    async def _apply_content(self, task: TaskModel, content: dict) -> None:
        for field in ("implementation_details", "notes", "due_date"):
            if content.get(field) is not None:
                setattr(task, field, content[field])
        if content.get("attachments") is not None:
            task.attachments = list(content["attachments"])
        if content.get("assignee") is not None:
            await self._check_user(content["assignee"], "assignee")
            task.assignee_id = content["assignee"]

        criteria = content.get("acceptance_criteria")
        if criteria is None:
            return
        existing = {c.id: c for c in task.acceptance_criteria}
        next_order = max((c.order_index for c in existing.values()), default=-1) + 1
        for item in criteria:
            if item.get("id") is not None:
                criterion = existing.get(item["id"])
                if criterion is None:
                    raise NotFoundError("criterion", item["id"])
                for key in ("description", "category", "notes"):
                    if item.get(key) is not None:
                        setattr(criterion, key, item[key])
                if item.get("order") is not None:
                    criterion.order_index = item["order"]
            else:
                if not item.get("description"):
                    raise ValidationError("Criterion description is required", field="acceptance_criteria")
                task.acceptance_criteria.append(
                    AcceptanceCriterionModel(
                        description=item["description"],
                        category=item.get("category"),
                        notes=item.get("notes"),
                        order_index=item["order"] if item.get("order") is not None else next_order,
                    )
                )
                next_order += 1

    async def move_task(
        self,
        user_id: UUID,
        task_id: UUID,
        status_id: int,
        order: int,
        type_code: str | None = None,
        comment: str | None = None,
    ) -> dict:
        """
        Move a task to a position in a status column.

        Runs in one transaction: close the gap in the old column, open a gap
        at order in the target column, update the task and record a
        task:moved audit entry. order past the end of the column is clamped.

        Args:
            user_id: Acting user
            task_id: Task to move
            status_id: Target status column
            order: 0-based target position
            type_code: Optional task type code to switch to
            comment: Optional comment stored with the audit entry

        Returns:
            dict: {"task_id", "status_id", "order"}

        Raises:
            NotFoundError: Missing task
            ValidationError: Unknown status or task type
        """
        task = await self._load(task_id)
        await self._check_edit(task.board_id, user_id)

        if await task_status_crud.get_by_id(self.db, status_id) is None:
            raise ValidationError("invalid status", field="status_id")
        new_type_id = None
        if type_code:
            task_type = await task_type_crud.get_by_code(self.db, type_code)
            if task_type is None:
                raise ValidationError("invalid task type", field="type")
            new_type_id = task_type.id

        from_status = task.status_id
        from_order = task.order_index
        try:
            await task_crud.shift_column(
                self.db, task.board_id, from_status, from_order, -1,
                exclude_id=task.id, inclusive=False,
            )
            size = await task_crud.column_size(self.db, task.board_id, status_id, exclude_id=task.id)
            target = min(order, size)
            await task_crud.shift_column(
                self.db, task.board_id, status_id, target, 1,
                exclude_id=task.id, inclusive=True,
            )
            task.status_id = status_id
            task.order_index = target
            if new_type_id is not None:
                task.type_id = new_type_id
            await audit_log_crud.create(
                self.db,
                entity_type="task",
                entity_id=task.id,
                action=TASK_MOVED_ACTION,
                actor_id=user_id,
                details={
                    "from_status": from_status,
                    "to_status": status_id,
                    "from_order": from_order,
                    "new_order": target,
                    "comment": comment,
                },
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to move task", extra={"error": str(e), "task_id": str(task_id)})
            raise

        logger.info(
            "Task moved",
            extra={
                "task_id": str(task_id),
                "from_status": from_status,
                "to_status": status_id,
                "new_order": target,
            },
        )
        return {"task_id": task_id, "status_id": status_id, "order": target}

    async def toggle_criterion(self, user_id: UUID, task_id: UUID, criterion_id: UUID) -> dict:
        """
        Flip completion of an acceptance criterion.

        Completing stamps completed_at/completed_by; reopening clears them.

        Returns:
            dict: The task after the change
        """
        task = await self._load(task_id)
        await self._check_edit(task.board_id, user_id)

        criterion = await criterion_crud.get_by_id(self.db, criterion_id)
        if criterion is None or criterion.task_id != task.id:
            raise NotFoundError("criterion", criterion_id)

        criterion.completed = not criterion.completed
        if criterion.completed:
            criterion.completed_at = utcnow()
            criterion.completed_by = user_id
        else:
            criterion.completed_at = None
            criterion.completed_by = None
        await self.db.commit()

        logger.info(
            "Criterion toggled",
            extra={"task_id": str(task_id), "criterion_id": str(criterion_id), "completed": criterion.completed},
        )
        return task_to_dict(await self._load(task_id))

    async def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        """
        Delete a task nothing depends on.

        Raises:
            NotFoundError: Missing task
            DependencyConflictError: Other tasks depend on it
        """
        task = await self._load(task_id)
        await self._check_edit(task.board_id, user_id)

        dependents = await task_crud.count_dependents(self.db, task_id)
        if dependents:
            raise DependencyConflictError(task_id, dependents)

        try:
            board_id, status_id, order_index = task.board_id, task.status_id, task.order_index
            await self.db.delete(task)
            await self.db.flush()
            await task_crud.shift_column(self.db, board_id, status_id, order_index, -1, inclusive=False)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to delete task", extra={"error": str(e), "task_id": str(task_id)})
            raise

        logger.info("Task deleted", extra={"task_id": str(task_id)})

    async def list_statuses(self) -> list[dict]:
        return [_lookup_dict(r) for r in await task_status_crud.list_all(self.db)]

    async def list_priorities(self) -> list[dict]:
        return [_lookup_dict(r) for r in await task_priority_crud.list_all(self.db)]

    async def list_types(self) -> list[dict]:
        return [_lookup_dict(r) for r in await task_type_crud.list_all(self.db)]
