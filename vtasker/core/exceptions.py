"""
Exception hierarchy for vTasker.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class VTaskerException(Exception):
    """Base exception for all vTasker application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(VTaskerException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(VTaskerException):
    """Raised when a resource cannot be found."""

    def __init__(
        self,
        resource: str,
        resource_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Resource kind (user, project, issue, board, task)
            resource_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        if resource_id is not None:
            details[f"{resource}_id"] = str(resource_id)
        self.resource = resource
        super().__init__(f"{resource.capitalize()} not found", details)


class ConflictError(VTaskerException):
    """Raised when a write collides with existing state (duplicate email, member)."""

    pass


class DependencyConflictError(ConflictError):
    """Raised when a task cannot be deleted because other tasks depend on it."""

    def __init__(self, task_id: Any, dependent_count: int) -> None:
        """
        Initialize dependency conflict.

        Args:
            task_id: Task that was asked to be deleted
            dependent_count: Number of tasks depending on it
        """
        self.dependent_count = dependent_count
        super().__init__(
            "Cannot delete task: other tasks depend on it",
            {"task_id": str(task_id), "dependent_count": dependent_count},
        )


class AuthenticationError(VTaskerException):
    """Raised when credentials or tokens are missing or invalid."""

    pass


class AccountLockedError(VTaskerException):
    """Raised when sign-in is attempted on a locked account."""

    pass


class PermissionDeniedError(VTaskerException):
    """Raised when the caller lacks permission for the operation."""

    pass

