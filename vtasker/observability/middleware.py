"""
Request middleware shared by the API and the gateway.

CorrelationMiddleware binds the request's correlation ID and echoes it in
the response; RequestLoggingMiddleware writes one line per request with
status and duration.

Dependencies: starlette, vtasker.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from vtasker.observability.correlation import (
    CORRELATION_HEADER,
    bind_correlation_id,
    reset_correlation_id,
)

logger = logging.getLogger(__name__)

QUIET_PATH_SUFFIXES = ("/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and elapsed milliseconds for each request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - unhandled {type(e).__name__}",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            raise

        # health probes only at DEBUG
        level = logging.DEBUG if path.endswith(QUIET_PATH_SUFFIXES) else logging.INFO
        logger.log(
            level,
            f"{method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": round((time.perf_counter() - started) * 1000, 2),
                "client_host": request.client.host if request.client else None,
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind X-Correlation-ID (or a new one) for the request and echo it back."""

    async def dispatch(self, request: Request, call_next):
        correlation_id, token = bind_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            reset_correlation_id(token)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
