"""
Task to dict mapping shared by the task and board services.

Dependencies: vtasker.boundary.db.models
System role: Task read model
"""

from vtasker.boundary.db.base import as_utc
from vtasker.boundary.db.models.task_model import AcceptanceCriterionModel, TaskModel


def progress_of(criteria: list[AcceptanceCriterionModel]) -> dict:
    """
    Completion summary of acceptance criteria.

    percentage is truncated to an int and is 0 when there are no criteria.
    """
    total = len(criteria)
    completed = sum(1 for c in criteria if c.completed)
    percentage = int(completed * 100 / total) if total else 0
    return {"total": total, "completed": completed, "percentage": percentage}


def criterion_to_dict(criterion: AcceptanceCriterionModel) -> dict:
    return {
        "id": criterion.id,
        "description": criterion.description,
        "completed": criterion.completed,
        "completed_at": as_utc(criterion.completed_at),
        "completed_by": criterion.completed_by,
        "order": criterion.order_index,
        "category": criterion.category,
        "notes": criterion.notes,
    }


def task_to_dict(task: TaskModel) -> dict:
    """Task with content, criteria, dependency ids and progress."""
    criteria = list(task.acceptance_criteria)
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status_id": task.status_id,
        "priority_id": task.priority_id,
        "type_id": task.type_id,
        "order_index": task.order_index,
        "owner_id": task.owner_id,
        "board_id": task.board_id,
        "parent_id": task.parent_id,
        "labels": list(task.labels or []),
        "dependencies": [dep.id for dep in task.dependencies],
        "content": {
            "description": task.description,
            "acceptance_criteria": [criterion_to_dict(c) for c in criteria],
            "implementation_details": task.implementation_details,
            "notes": task.notes,
            "attachments": list(task.attachments or []),
            "due_date": as_utc(task.due_date),
            "assignee": task.assignee_id,
        },
        "progress": progress_of(criteria),
        "created_at": task.created_at,
        "updated_at": task.updated_at,
    }
