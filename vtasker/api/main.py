"""
FastAPI application with assembled routers.

Initializes the backend API with all routers under /api/v1 and configures
the uvicorn server.

Dependencies: fastapi, vtasker.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vtasker import __version__
from vtasker.boundary.db import get_async_engine
from vtasker.configs import get_settings
from vtasker.configs.auth import DEFAULT_JWT_SECRET
from vtasker.observability.logger import configure_logging
from vtasker.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    auth_router,
    boards_router,
    health_router,
    issues_router,
    lookups_router,
    preferences_router,
    projects_router,
    tasks_router,
    users_router,
)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")
    settings = get_settings()

    # Startup
    logger.info(
        "vTasker API starting",
        extra={"environment": settings.environment, "version": __version__},
    )
    if settings.is_production and settings.auth.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("AUTH_JWT_SECRET is the default value in production")

    yield

    # Shutdown
    await get_async_engine().dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="vTasker API",
        debug=settings.debug,
        description="Task, issue and project management API",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(preferences_router, prefix=API_PREFIX)
    app.include_router(projects_router, prefix=API_PREFIX)
    app.include_router(issues_router, prefix=API_PREFIX)
    app.include_router(boards_router, prefix=API_PREFIX)
    app.include_router(tasks_router, prefix=API_PREFIX)
    app.include_router(lookups_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "vtasker.api.main:app",
        host="0.0.0.0",
        port=8080,
    )
