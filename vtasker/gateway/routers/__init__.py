"""Gateway routers."""

from .auth import router as auth_router
from .health import router as health_router
from .issues import router as issues_router
from .projects import router as projects_router
from .users import preferences_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "health_router",
    "issues_router",
    "preferences_router",
    "projects_router",
    "users_router",
]
