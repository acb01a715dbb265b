"""
Tests for health and auth endpoints.

Services are replaced with AsyncMocks through dependency_overrides.

System role: Verification of auth HTTP contracts
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from vtasker.api.deps.dependencies import get_auth_service, get_current_user
from vtasker.api.main import create_app
from vtasker.application.services.auth_service import CurrentUser
from vtasker.boundary.db import get_async_db
from vtasker.core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def anonymous_client():
    """Client without the get_current_user override."""
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_result() -> dict:
    return {
        "token": "header.payload.signature",
        "user": {"id": uuid.uuid4(), "email": "a@example.com", "name": "Ana"},
    }


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_correlation_id_should_be_echoed_or_generated(client):
    echoed = client.get("/api/v1/health", headers={"X-Correlation-ID": "req-42"})
    generated = client.get("/api/v1/health")

    assert echoed.headers["X-Correlation-ID"] == "req-42"
    assert generated.headers["X-Correlation-ID"]


def test_health_db_should_report_unavailable(client):
    broken = AsyncMock()
    broken.execute.side_effect = RuntimeError("connection refused")

    async def broken_db():
        yield broken

    client.app.dependency_overrides[get_async_db] = broken_db

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_check_email_should_wrap_in_data(client, mock_service):
    mock_service.check_email.return_value = True
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/check-email", json={"email": "a@example.com"})

    assert response.status_code == 200
    assert response.json() == {"data": {"exists": True}}


def test_check_email_should_reject_malformed_address(client, mock_service):
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/check-email", json={"email": "not-an-email"})

    assert response.status_code == 422


def test_sign_up_should_return_201(client, mock_service):
    mock_service.sign_up.return_value = auth_result()
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post(
        "/api/v1/auth/sign-up",
        json={"email": "a@example.com", "password": "password123", "name": "Ana"},
        headers={"User-Agent": "pytest-agent"},
    )

    assert response.status_code == 201
    assert response.json()["token"] == "header.payload.signature"
    assert mock_service.sign_up.call_args.kwargs["user_agent"] == "pytest-agent"


def test_sign_up_duplicate_should_return_409(client, mock_service):
    mock_service.sign_up.side_effect = ConflictError("Email already registered")
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post(
        "/api/v1/auth/sign-up",
        json={"email": "a@example.com", "password": "password123", "name": "Ana"},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.parametrize(
    "error,status_code",
    [
        (AuthenticationError("Invalid credentials"), 401),
        (AccountLockedError("Account is locked due to too many failed attempts"), 403),
        (ValidationError("bad"), 400),
        (RuntimeError("boom"), 500),
    ],
)
def test_sign_in_error_mapping(client, mock_service, error, status_code):
    mock_service.sign_in.side_effect = error
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post(
        "/api/v1/auth/sign-in",
        json={"email": "a@example.com", "password": "password123", "rememberMe": True},
    )

    assert response.status_code == status_code


def test_sign_in_should_pass_remember_me(client, mock_service):
    mock_service.sign_in.return_value = auth_result()
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post(
        "/api/v1/auth/sign-in",
        json={"email": "a@example.com", "password": "password123", "rememberMe": True},
    )

    assert response.status_code == 200
    assert mock_service.sign_in.call_args.kwargs["remember_me"] is True


def test_sessions_should_use_camel_case(client, mock_service, current_user):
    mock_service.list_sessions.return_value = [
        {
            "id": current_user.session_id,
            "user_agent": "firefox",
            "ip_address": "10.0.0.1",
            "last_used": datetime.now(timezone.utc),
            "current": True,
        }
    ]
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.get("/api/v1/auth/sessions")

    assert response.status_code == 200
    session = response.json()["data"][0]
    assert session["userAgent"] == "firefox"
    assert session["ipAddress"] == "10.0.0.1"
    assert session["current"] is True


def test_revoke_session_errors(client, mock_service):
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    mock_service.revoke_session.side_effect = ValidationError("Cannot revoke current session")
    response = client.post("/api/v1/auth/sessions/revoke", json={"sessionId": str(uuid.uuid4())})
    assert response.status_code == 400

    mock_service.revoke_session.side_effect = NotFoundError("session")
    response = client.post("/api/v1/auth/sessions/revoke", json={"sessionId": str(uuid.uuid4())})
    assert response.status_code == 404


def test_sign_out_and_revoke_all_should_return_204(client, mock_service, current_user):
    mock_service.revoke_other_sessions.return_value = 2
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    assert client.post("/api/v1/auth/sign-out").status_code == 204
    assert client.post("/api/v1/auth/sessions/revoke-all").status_code == 204
    mock_service.sign_out.assert_awaited_once_with(current_user)


def test_refresh_should_return_new_token(client, mock_service, current_user):
    mock_service.refresh.return_value = auth_result()
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/refresh", headers={"User-Agent": "cli"})

    assert response.status_code == 200
    assert response.json()["token"] == "header.payload.signature"
    assert mock_service.refresh.call_args.args == (current_user,)
    assert mock_service.refresh.call_args.kwargs["user_agent"] == "cli"


def test_refresh_of_revoked_session_should_return_401(client, mock_service):
    mock_service.refresh.side_effect = AuthenticationError("Session expired or revoked")
    client.app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/refresh")

    assert response.status_code == 401


class TestCurrentUserDependency:
    """get_current_user header handling."""

    def test_missing_header_should_return_401(self, anonymous_client, mock_service):
        anonymous_client.app.dependency_overrides[get_auth_service] = lambda: mock_service

        response = anonymous_client.get("/api/v1/projects")

        assert response.status_code == 401
        assert response.json()["detail"] == "Authorization header required"

    def test_malformed_header_should_return_401(self, anonymous_client, mock_service):
        anonymous_client.app.dependency_overrides[get_auth_service] = lambda: mock_service

        response = anonymous_client.get("/api/v1/projects", headers={"Authorization": "Token abc"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid authorization header format"

    def test_revoked_session_should_return_401(self, anonymous_client, mock_service):
        mock_service.authenticate.side_effect = AuthenticationError("Session expired or revoked")
        anonymous_client.app.dependency_overrides[get_auth_service] = lambda: mock_service

        response = anonymous_client.get("/api/v1/auth/sessions", headers={"Authorization": "Bearer abc"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Session expired or revoked"

    def test_valid_token_should_reach_route(self, anonymous_client, mock_service):
        caller = CurrentUser(id=uuid.uuid4(), email="a@example.com", session_id=uuid.uuid4())
        mock_service.authenticate.return_value = caller
        mock_service.list_sessions.return_value = []
        anonymous_client.app.dependency_overrides[get_auth_service] = lambda: mock_service

        response = anonymous_client.get("/api/v1/auth/sessions", headers={"Authorization": "Bearer abc"})

        assert response.status_code == 200
        mock_service.authenticate.assert_awaited_once_with("abc")
        assert get_current_user not in anonymous_client.app.dependency_overrides
