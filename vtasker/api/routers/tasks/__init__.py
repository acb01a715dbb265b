"""
Tasks router package.

Exports the task router and the lookup router.
"""

from .lookups_router import router as lookups_router
from .tasks_router import router

__all__ = ["lookups_router", "router"]
