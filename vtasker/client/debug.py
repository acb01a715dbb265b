"""
Auth debugging aid.

AuthDebugMonitor is a logging handler that keeps the most recent auth
and token related log lines, and reports where a token is stored each
time the authentication state changes.
"""

import json
import logging
from collections import deque
from enum import Enum

from vtasker.client.token_store import TokenStore

logger = logging.getLogger(__name__)

MAX_RECORDS = 20
_KEYWORDS = ("auth", "token")


class AuthStatus(str, Enum):
    AUTHENTICATED = "authenticated"
    TOKEN_ONLY = "token_only"
    ANONYMOUS = "anonymous"


class AuthDebugMonitor(logging.Handler):
    """
    Captures auth related log lines and tracks token storage state.

    Attach it to the "vtasker" logger to collect records:

        monitor = AuthDebugMonitor(store)
        logging.getLogger("vtasker").addHandler(monitor)
    """

    def __init__(self, store: TokenStore, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.store = store
        self.records: deque[str] = deque(maxlen=MAX_RECORDS)
        self._last_state: str | None = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
        except Exception:
            self.handleError(record)
            return
        if any(word in text.lower() for word in _KEYWORDS):
            self.records.append(text)

    def state(self, authenticated: bool) -> dict[str, bool]:
        snapshot = self.store.snapshot()
        return {
            "hasLocalStorage": snapshot["has_local"],
            "hasSessionStorage": snapshot["has_session"],
            "hasCookie": snapshot["has_cookie"],
            "isAuthenticated": authenticated,
        }

    def status(self, authenticated: bool) -> AuthStatus:
        if authenticated:
            return AuthStatus.AUTHENTICATED
        if self.store.get():
            return AuthStatus.TOKEN_ONLY
        return AuthStatus.ANONYMOUS

    def check(self, authenticated: bool) -> AuthStatus:
        """
        Current AuthStatus; the storage state is logged only when it
        differs from the previous check.
        """
        state = self.state(authenticated)
        status = self.status(authenticated)
        serialized = json.dumps(state, sort_keys=True)
        if serialized != self._last_state:
            self._last_state = serialized
            logger.info("Auth state changed", extra={**state, "auth_status": status.value})
        return status

    def clear(self) -> None:
        self.records.clear()
