"""Shared router helpers."""

from .error_handling import handle_api_errors

__all__ = ["handle_api_errors"]
