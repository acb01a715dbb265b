"""
API error handling utilities.

Provides a decorator that turns domain exceptions raised by the service
layer into HTTPExceptions with consistent status codes.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from vtasker.core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    ConflictError,
    DependencyConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_api_errors(func: F) -> F:
    """
    Decorator to transform service exceptions into HTTPExceptions.

    This centralizes:
    - Logging of errors with their details as context
    - Mapping exception types to HTTP status codes
    - Uniform error detail payloads
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": e.message, "details": e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except AuthenticationError as e:
            logger.warning("Authentication failed", extra={"error": e.message})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)

        except (AccountLockedError, PermissionDeniedError) as e:
            logger.warning("Forbidden", extra={"error": e.message, "details": e.details})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": e.message, "details": e.details})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except DependencyConflictError as e:
            logger.warning("Dependency conflict", extra={"error": e.message, "details": e.details})
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={"message": e.message, "dependent_count": e.dependent_count},
            )

        except ConflictError as e:
            logger.warning("Conflict", extra={"error": e.message, "details": e.details})
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False, include_context=False),
            )

        except Exception as e:
            logger.exception("Unexpected failure in API operation", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
