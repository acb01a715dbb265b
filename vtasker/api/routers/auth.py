"""
Auth API endpoints.

Routes:
- POST /auth/check-email - Does an account exist for this email
- POST /auth/sign-up - Register and sign in
- POST /auth/sign-in - Sign in with optional remember-me
- POST /auth/sign-out - Revoke the current session
- POST /auth/refresh - Rotate the current session token
- GET /auth/sessions - List active sessions
- POST /auth/sessions/revoke - Revoke one other session
- POST /auth/sessions/revoke-all - Revoke every other session

Dependencies: vtasker.application.services, vtasker.models
System role: Authentication HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from vtasker.api.deps.dependencies import get_auth_service, get_current_user
from vtasker.api.routers.router_utils import handle_api_errors
from vtasker.application.services.auth_service import AuthService, CurrentUser
from vtasker.models.auth import (
    AuthResponse,
    CheckEmailRequest,
    CheckEmailResult,
    RevokeSessionRequest,
    SessionInfo,
    SignInRequest,
    SignUpRequest,
)
from vtasker.models.common import DataResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _client_info(request: Request) -> dict:
    return {
        "user_agent": request.headers.get("user-agent"),
        "ip_address": request.client.host if request.client else None,
    }


@router.post("/check-email", response_model=DataResponse[CheckEmailResult])
@handle_api_errors
async def check_email(
    body: CheckEmailRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> DataResponse[CheckEmailResult]:
    """Tell the email step whether to show login or registration."""
    exists = await auth_service.check_email(body.email)
    return DataResponse[CheckEmailResult](data=CheckEmailResult(exists=exists))


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def sign_up(
    body: SignUpRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new account and return a token for it.

    Raises:
        HTTPException(400): Password policy violated
        HTTPException(409): Email already registered
    """
    result = await auth_service.sign_up(
        email=body.email,
        password=body.password,
        name=body.name,
        **_client_info(request),
    )
    return AuthResponse(**result)


@router.post("/sign-in", response_model=AuthResponse)
@handle_api_errors
async def sign_in(
    body: SignInRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Sign in with email and password.

    Raises:
        HTTPException(401): Invalid credentials
        HTTPException(403): Account locked
    """
    result = await auth_service.sign_in(
        email=body.email,
        password=body.password,
        remember_me=body.remember_me,
        **_client_info(request),
    )
    return AuthResponse(**result)


@router.post("/refresh", response_model=AuthResponse)
@handle_api_errors
async def refresh(
    request: Request,
    current: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Exchange the presented token for a new one with the same lifetime.

    The old token stops working immediately.
    """
    result = await auth_service.refresh(current, **_client_info(request))
    return AuthResponse(**result)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def sign_out(
    current: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    """Revoke the session behind the presented token."""
    await auth_service.sign_out(current)


@router.get("/sessions", response_model=DataResponse[list[SessionInfo]])
@handle_api_errors
async def list_sessions(
    current: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> DataResponse[list[SessionInfo]]:
    """Active sessions of the caller, most recently used first."""
    sessions = await auth_service.list_sessions(current)
    return DataResponse[list[SessionInfo]](data=[SessionInfo(**s) for s in sessions])


@router.post("/sessions/revoke", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def revoke_session(
    body: RevokeSessionRequest,
    current: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    """
    Revoke one of the caller's other sessions.

    Raises:
        HTTPException(400): Attempt to revoke the current session
        HTTPException(404): Unknown session
    """
    await auth_service.revoke_session(current, body.session_id)


@router.post("/sessions/revoke-all", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def revoke_all_sessions(
    current: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    """Revoke every session of the caller except the current one."""
    revoked = await auth_service.revoke_other_sessions(current)
    logger.info("Revoke-all completed", extra={"user_id": str(current.id), "revoked_count": revoked})
