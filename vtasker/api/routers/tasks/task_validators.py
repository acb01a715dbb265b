"""
Task validation utilities.

Business rules not covered by the Pydantic models, mirroring the task
form schema.

Dependencies: vtasker.models.task
System role: Task business logic validation
"""

from vtasker.core.exceptions import ValidationError
from vtasker.models.task import CreateTaskRequest, MoveTaskRequest, UpdateTaskRequest

MAX_LABELS = 20
MAX_LABEL_LENGTH = 50


def _validate_labels(labels: list[str]) -> None:
    if len(labels) > MAX_LABELS:
        raise ValidationError(f"A task can have at most {MAX_LABELS} labels", field="labels")
    for label in labels:
        if not label.strip():
            raise ValidationError("Labels cannot be blank", field="labels")
        if len(label) > MAX_LABEL_LENGTH:
            raise ValidationError(
                f"Labels cannot exceed {MAX_LABEL_LENGTH} characters", field="labels"
            )


def validate_task_creation(request: CreateTaskRequest) -> None:
    """
    Validate task creation request with business rules.

    Raises:
        ValidationError: Blank title or description, or bad labels
    """
    if not request.title.strip():
        raise ValidationError("Title is required", field="title")
    if not request.description.strip():
        raise ValidationError("Description is required", field="description")
    _validate_labels(request.labels)
    for criterion in request.content.acceptance_criteria:
        if not criterion.description.strip():
            raise ValidationError("Criterion description is required", field="acceptance_criteria")


def validate_task_update(request: UpdateTaskRequest) -> None:
    """Same rules as creation, for the fields present."""
    if request.title is not None and not request.title.strip():
        raise ValidationError("Title is required", field="title")
    if request.description is not None and not request.description.strip():
        raise ValidationError("Description is required", field="description")
    if request.labels is not None:
        _validate_labels(request.labels)


def validate_task_move(request: MoveTaskRequest) -> None:
    if request.comment is not None and len(request.comment) > 1000:
        raise ValidationError("Comment cannot exceed 1000 characters", field="comment")
