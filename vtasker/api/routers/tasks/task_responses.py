"""
Task response mapping utilities.

Transforms service dictionaries into Pydantic response models.

Dependencies: vtasker.models.task
System role: Task response transformation
"""

from typing import Any

from vtasker.models.task import LookupResponse, MoveTaskResponse, TaskResponse


def map_task_to_response(task_data: dict[str, Any]) -> TaskResponse:
    """
    Transform task data dictionary into TaskResponse.

    Args:
        task_data: Dictionary from TaskService, with nested content and
            progress dictionaries

    Returns:
        TaskResponse: Pydantic model for API response
    """
    return TaskResponse(**task_data)


def map_tasks_to_response(tasks_data: list[dict[str, Any]]) -> list[TaskResponse]:
    return [map_task_to_response(task) for task in tasks_data]


def map_move_to_response(move_data: dict[str, Any]) -> MoveTaskResponse:
    return MoveTaskResponse(**move_data)


def map_lookups_to_response(rows: list[dict[str, Any]]) -> list[LookupResponse]:
    return [LookupResponse(**row) for row in rows]
