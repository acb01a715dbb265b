"""
Common response models and utilities.

The {"data": ...} envelope and shared field patterns.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class DataResponse(BaseModel, Generic[T]):
    """Envelope used by endpoints that answer {"data": ...}."""

    data: T

