"""
Synchronous client for the vTasker API.

Reads the bearer token from the TokenStore on every request, unwraps
{"data": ...} envelopes and raises ApiError for failures. Transient
failures (network errors, 5xx) are retried with a fixed delay; 4xx
answers never are.

Dependencies: httpx, tenacity, vtasker.client.token_store
System role: Client SDK transport
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import httpx
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_fixed

from vtasker.client.token_store import TokenStore
from vtasker.configs import get_settings
from vtasker.configs.gateway import ClientSettings
from vtasker.observability.log_utils import log_with_context, mask_token

logger = logging.getLogger(__name__)

NETWORK_ERROR = "NETWORK_ERROR"
REFRESH_THRESHOLD = timedelta(minutes=5)
_MESSAGE_KEYS = ("message", "error", "detail")


class ApiError(Exception):
    """
    Failed API call.

    Attributes:
        message: Human-readable message from the response
        status_code: HTTP status, None for transport failures
        code: NETWORK_ERROR for transport failures, else HTTP_<status>
    """

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code or (f"HTTP_{status_code}" if status_code else NETWORK_ERROR)
        super().__init__(message)

    @property
    def is_transient(self) -> bool:
        return self.code == NETWORK_ERROR or (self.status_code or 0) >= 500


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, ApiError) and exc.is_transient


def error_message(response: httpx.Response) -> str:
    """message, error or detail from a JSON body, else the raw text."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in _MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return response.text or f"Request failed with status {response.status_code}"


class VTaskerClient:
    """
    API client bound to {api_url}{api_base_path}.

    Usage:
        client = VTaskerClient()
        client.sign_in("a@example.com", "secret123", remember_me=True)
        boards = client.list_boards()
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        token_store: TokenStore | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings().client
        self.tokens = token_store or TokenStore(self.settings.token_dir)
        base_url = f"{self.settings.api_url.rstrip('/')}/{self.settings.api_base_path.strip('/')}"
        self._http = httpx.Client(
            base_url=base_url,
            timeout=self.settings.timeout_seconds,
            transport=transport,
        )
        self._retrying = Retrying(
            retry=retry_if_exception(_is_transient),
            stop=stop_after_attempt(self.settings.retry_count + 1),
            wait=wait_fixed(self.settings.retry_delay_seconds),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:request - Retry {retry_state.attempt_number}/{self.settings.retry_count} "
                f"after {retry_state.outcome.exception()}"
            ),
            reraise=True,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "VTaskerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send(self, method: str, path: str, **kwargs) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self.tokens.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            log_with_context(logger, logging.WARNING, "Network error calling API", method=method, path=path, error=e)
            raise ApiError(str(e) or "Network error", code=NETWORK_ERROR) from e

        if not response.is_success:
            message = error_message(response)
            logger.info(
                "API call failed",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "token": mask_token(token),
                },
            )
            raise ApiError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        body = response.json()
        if isinstance(body, dict) and set(body) == {"data"}:
            return body["data"]
        return body

    def request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send a request with the retry policy applied.

        Raises:
            ApiError: Final failure after retries
        """
        return self._retrying(self._send, method, path, **kwargs)

    # Auth

    def check_email(self, email: str) -> bool:
        return bool(self.request("POST", "/auth/check-email", json={"email": email})["exists"])

    def sign_in(self, email: str, password: str, remember_me: bool = False) -> dict:
        """Sign in and store the token (local storage when remember_me)."""
        result = self.request(
            "POST",
            "/auth/sign-in",
            json={"email": email, "password": password, "rememberMe": remember_me},
        )
        self.tokens.store(result["token"], remember_me=remember_me)
        return result

    def sign_up(self, email: str, password: str, name: str) -> dict:
        """Register and store the token persistently."""
        result = self.request(
            "POST",
            "/auth/sign-up",
            json={"email": email, "password": password, "name": name},
        )
        self.tokens.store(result["token"], remember_me=True)
        return result

    def sign_out(self) -> None:
        """Revoke the current session upstream and clear local tokens."""
        try:
            self.request("POST", "/auth/sign-out")
        finally:
            self.tokens.clear()

    def refresh_token(self) -> dict:
        """
        Rotate the session token and store the new one in the same slot.

        Raises:
            ApiError: No stored token (status 401) or the backend refused
        """
        if not self.tokens.get():
            raise ApiError("Not authenticated", 401)
        remember_me = self.tokens.is_remembered()
        result = self.request("POST", "/auth/refresh")
        self.tokens.store(result["token"], remember_me=remember_me)
        return result

    def ensure_fresh_token(self, threshold: timedelta = REFRESH_THRESHOLD) -> bool:
        """
        Refresh the token when it expires within threshold.

        Returns:
            bool: True when a refresh happened
        """
        expires_at = self.tokens.expires_at()
        if expires_at is None or expires_at - datetime.now(timezone.utc) > threshold:
            return False
        logger.info("Token expiring soon, refreshing", extra={"expires_at": expires_at.isoformat()})
        self.refresh_token()
        return True

    def list_sessions(self) -> list[dict]:
        return self.request("GET", "/auth/sessions")

    def revoke_session(self, session_id: UUID | str) -> None:
        self.request("POST", "/auth/sessions/revoke", json={"sessionId": str(session_id)})

    def revoke_all_sessions(self) -> None:
        self.request("POST", "/auth/sessions/revoke-all")

    # Users

    def get_profile(self) -> dict:
        """
        Profile of the signed-in user, addressed by the token's user_id.

        Raises:
            ApiError: No usable token (status 401)
        """
        user_id = self.tokens.user_id()
        if user_id is None:
            raise ApiError("Not authenticated", 401)
        return self.request("GET", f"/users/{user_id}")

    def update_profile(self, **changes) -> dict:
        user_id = self.tokens.user_id()
        if user_id is None:
            raise ApiError("Not authenticated", 401)
        return self.request("PATCH", f"/users/{user_id}", json=changes)

    def get_preferences(self) -> dict:
        return self.request("GET", "/user/preferences")

    def update_preferences(self, **changes) -> dict:
        return self.request("PATCH", "/user/preferences", json=changes)

    # Projects

    def list_projects(self, page: int = 1, page_size: int = 10) -> dict:
        return self.request("GET", "/projects", params={"page": page, "page_size": page_size})

    def create_project(self, name: str, description: str | None = None) -> dict:
        return self.request("POST", "/projects", json={"name": name, "description": description})

    def get_project(self, project_id: UUID | str) -> dict:
        return self.request("GET", f"/projects/{project_id}")

    def update_project(self, project_id: UUID | str, **changes) -> dict:
        return self.request("PATCH", f"/projects/{project_id}", json=changes)

    def delete_project(self, project_id: UUID | str) -> None:
        self.request("DELETE", f"/projects/{project_id}")

    # Issues

    def list_issues(self, page: int = 1, page_size: int = 10, **filters) -> dict:
        params = {k: str(v) for k, v in filters.items() if v is not None}
        params.update(page=page, page_size=page_size)
        return self.request("GET", "/issues", params=params)

    def create_issue(self, **fields) -> dict:
        return self.request("POST", "/issues", json=_jsonable(fields))

    def get_issue(self, issue_id: UUID | str) -> dict:
        return self.request("GET", f"/issues/{issue_id}")

    def update_issue(self, issue_id: UUID | str, **changes) -> dict:
        return self.request("PATCH", f"/issues/{issue_id}", json=_jsonable(changes))

    def delete_issue(self, issue_id: UUID | str) -> None:
        self.request("DELETE", f"/issues/{issue_id}")

    # Boards

    def list_boards(self) -> list[dict]:
        return self.request("GET", "/boards")

    def create_board(self, name: str, **fields) -> dict:
        return self.request("POST", "/boards", json=_jsonable({"name": name, **fields}))

    def get_board(self, board_id: UUID | str) -> dict:
        return self.request("GET", f"/boards/{board_id}")

    def get_board_by_slug(self, slug: str) -> dict:
        return self.request("GET", f"/boards/b/{slug}")

    # Tasks

    def list_tasks(self, **filters) -> list[dict]:
        params = {k: str(v) for k, v in filters.items() if v is not None}
        return self.request("GET", "/tasks", params=params)

    def create_task(self, title: str, description: str, **fields) -> dict:
        return self.request(
            "POST", "/tasks", json=_jsonable({"title": title, "description": description, **fields})
        )

    def get_task(self, task_id: UUID | str) -> dict:
        return self.request("GET", f"/tasks/{task_id}")

    def update_task(self, task_id: UUID | str, **changes) -> dict:
        return self.request("PUT", f"/tasks/{task_id}", json=_jsonable(changes))

    def move_task(
        self,
        task_id: UUID | str,
        status_id: int,
        order: int,
        type: str | None = None,
        comment: str | None = None,
    ) -> dict:
        body = {"status_id": status_id, "order": order, "type": type, "comment": comment}
        return self.request("POST", f"/tasks/{task_id}/move", json=body)

    def toggle_criterion(self, task_id: UUID | str, criterion_id: UUID | str) -> dict:
        return self.request("POST", f"/tasks/{task_id}/criteria/{criterion_id}/toggle")

    def delete_task(self, task_id: UUID | str) -> None:
        self.request("DELETE", f"/tasks/{task_id}")

    # Lookups

    def task_statuses(self) -> list[dict]:
        return self.request("GET", "/task-statuses")

    def task_priorities(self) -> list[dict]:
        return self.request("GET", "/task-priorities")

    def task_types(self) -> list[dict]:
        return self.request("GET", "/task-types")


def _jsonable(value: Any) -> Any:
    """UUIDs to strings, recursively."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value
