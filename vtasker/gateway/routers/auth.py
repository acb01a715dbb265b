"""
Auth proxy routes.

Routes:
- POST /auth/check-email
- POST /auth/sign-in
- POST /auth/sign-up
- POST /auth/refresh

Only refresh forwards the caller's Authorization header.

Dependencies: fastapi, httpx, vtasker.gateway.upstream
System role: Authentication proxy
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
    passthrough,
)
from vtasker.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/check-email")
async def check_email(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """Forward the email step; any upstream failure becomes a 500."""
    try:
        body = await request.json()
        if not isinstance(body, dict) or not body.get("email"):
            return error_response("Email is required", 400)

        response = await upstream.request("POST", "/auth/check-email", json=body)
        if not response.is_success:
            log_with_context(
                logger,
                logging.ERROR,
                "Email check failed upstream",
                status_code=response.status_code,
                upstream_error=response.text,
            )
            return error_response("Failed to check email", 500)
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error checking email", e)
        return error_response("Failed to check email", 500)


@router.post("/sign-in")
async def sign_in(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """
    Forward credentials.

    Upstream errors keep their status and message ("Invalid credentials"
    when the body has none).
    """
    try:
        body = await request.json()
        if not isinstance(body, dict) or not body.get("email") or not body.get("password"):
            return error_response("Email and password are required", 400)

        response = await upstream.request("POST", "/auth/sign-in", json=body)
        if not response.is_success:
            message = extract_error_message(response, "Invalid credentials")
            log_with_context(
                logger,
                logging.WARNING,
                "Sign-in rejected upstream",
                status_code=response.status_code,
                upstream_error=message,
            )
            return error_response(message, response.status_code)
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error during sign in", e)
        return error_response("Authentication failed", 500)


@router.post("/sign-up")
async def sign_up(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        body = await request.json()
        if (
            not isinstance(body, dict)
            or not body.get("email")
            or not body.get("password")
            or not body.get("name")
        ):
            return error_response("Email, password and name are required", 400)

        response = await upstream.request("POST", "/auth/sign-up", json=body)
        if not response.is_success:
            message = extract_error_message(response, "Registration failed")
            return error_response(message, response.status_code)
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error during sign up", e)
        return error_response("Registration failed", 500)


@router.post("/refresh")
async def refresh(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """Forward a token rotation; the new token comes back unchanged."""
    authorization = resolve_authorization(request)
    if not authorization:
        return error_response("No authorization token provided", 401)

    try:
        response = await upstream.request("POST", "/auth/refresh", authorization=authorization)
        if not response.is_success:
            message = extract_error_message(response, "Token refresh failed")
            log_with_context(
                logger,
                logging.WARNING,
                "Token refresh rejected upstream",
                status_code=response.status_code,
                upstream_error=message,
            )
            return error_response(message, response.status_code)
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error refreshing token", e)
        return error_response("Token refresh failed", 500)
