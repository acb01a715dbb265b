"""
Gateway application.

Serves the proxy routes under /api and forwards them to the backend.

Dependencies: fastapi, uvicorn, vtasker.gateway.routers
System role: Proxy entry point
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vtasker import __version__
from vtasker.configs import get_settings
from vtasker.gateway.upstream import UpstreamClient
from vtasker.observability.logger import configure_logging
from vtasker.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    auth_router,
    health_router,
    issues_router,
    preferences_router,
    projects_router,
    users_router,
)

GATEWAY_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the upstream client on shutdown."""
    logger = logging.getLogger("uvicorn")
    logger.info("vTasker gateway starting", extra={"upstream": app.state.upstream.base_url})

    yield

    await app.state.upstream.aclose()
    logger.info("Upstream client closed")


def create_gateway_app(upstream: UpstreamClient | None = None) -> FastAPI:
    """
    Create the gateway application.

    Args:
        upstream: Backend client; built from GatewaySettings when omitted

    Returns:
        FastAPI: Configured gateway application
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="vTasker Gateway",
        debug=settings.debug,
        description="Proxy routes forwarding to the vTasker API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.upstream = upstream or UpstreamClient.from_settings(settings.gateway)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router, prefix=GATEWAY_PREFIX)
    app.include_router(auth_router, prefix=GATEWAY_PREFIX)
    app.include_router(projects_router, prefix=GATEWAY_PREFIX)
    app.include_router(issues_router, prefix=GATEWAY_PREFIX)
    app.include_router(users_router, prefix=GATEWAY_PREFIX)
    app.include_router(preferences_router, prefix=GATEWAY_PREFIX)

    return app


app = create_gateway_app()


if __name__ == "__main__":
    uvicorn.run(
        "vtasker.gateway.main:app",
        host="0.0.0.0",
        port=3000,
    )
