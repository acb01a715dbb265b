"""
Auth header propagation for proxied requests.

The token comes from the incoming Authorization header, falling back to
the auth_token cookie set by the client.

Dependencies: fastapi, vtasker.core.security, vtasker.observability
System role: Bearer token forwarding
"""

import logging

from fastapi import Request

from vtasker.core.security import strip_bearer
from vtasker.observability.log_utils import mask_token

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "auth_token"


def resolve_authorization(request: Request) -> str | None:
    """
    Authorization header value to forward upstream.

    Returns:
        "Bearer <token>", or None when the request carries no token
    """
    header = request.headers.get("authorization")
    source = "header"
    token = strip_bearer(header) if header else None
    if not token:
        token = strip_bearer(request.cookies.get(AUTH_COOKIE_NAME))
        source = "cookie"

    if not token:
        logger.debug("No auth token on proxied request", extra={"path": request.url.path})
        return None

    logger.debug(
        "Forwarding auth token",
        extra={"token_source": source, "token": mask_token(token), "path": request.url.path},
    )
    return f"Bearer {token}"
