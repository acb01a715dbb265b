"""
User proxy routes.

Routes:
- GET /users/{id}, PATCH /users/{id}
- GET /user/preferences, PATCH /user/preferences

Dependencies: fastapi, httpx, vtasker.gateway
System role: User profile proxy
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from vtasker.gateway.headers import resolve_authorization
from vtasker.gateway.upstream import (
    UpstreamClient,
    error_response,
    extract_error_message,
    get_upstream,
    is_json,
    passthrough,
)
from vtasker.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])
preferences_router = APIRouter(prefix="/user", tags=["users"])


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        response = await upstream.request(
            "GET",
            f"/users/{user_id}",
            authorization=resolve_authorization(request),
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to fetch user"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error fetching user", e, user_id=user_id)
        return error_response("Failed to fetch user", 500)


@router.patch("/{user_id}")
async def update_user(
    user_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """
    Forward a profile update.

    The body must be JSON and a token must be present. Non-JSON upstream
    answers are reported as a server error.
    """
    try:
        body = await request.json()
    except ValueError:
        return error_response("Invalid request body", 400)

    authorization = resolve_authorization(request)
    if authorization is None:
        logger.warning("Profile update without token", extra={"user_id": user_id})
        return error_response("No authorization token provided", 401)

    try:
        response = await upstream.request(
            "PATCH",
            f"/users/{user_id}",
            authorization=authorization,
            json=body,
        )
    except Exception as e:
        log_exception_with_context(logger, "Failed to reach backend", e, user_id=user_id)
        return error_response("Failed to communicate with server", 500)

    if not is_json(response):
        logger.error(
            "Non-JSON response from backend",
            extra={"user_id": user_id, "status_code": response.status_code},
        )
        return error_response("Invalid response format from server", 500)

    try:
        data = response.json()
    except ValueError:
        return error_response("Invalid response from server", 500)

    if not response.is_success:
        return error_response(
            extract_error_message(response, "Update failed"),
            response.status_code,
        )
    return JSONResponse(content=data)


@preferences_router.get("/preferences")
async def get_preferences(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        response = await upstream.request(
            "GET",
            "/user/preferences",
            authorization=resolve_authorization(request),
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to fetch preferences"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error fetching preferences", e)
        return error_response("Failed to fetch preferences", 500)


@preferences_router.patch("/preferences")
async def update_preferences(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        return error_response("Failed to update preferences", 400)

    try:
        response = await upstream.request(
            "PATCH",
            "/user/preferences",
            authorization=resolve_authorization(request),
            json=body,
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to update preferences"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error updating preferences", e)
        return error_response("Failed to update preferences", 500)
