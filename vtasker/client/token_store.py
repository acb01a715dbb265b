"""
Layered auth token storage.

Three slots hold the token under the auth_token key: a persistent local
file (remember me), in-process session memory, and a cookie jar shared
with the HTTP client. Reads prefer local, then session, then cookie.

Dependencies: httpx, PyJWT
System role: Client-side credential storage
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from uuid import UUID

import httpx
import jwt

from vtasker.core.security import strip_bearer
from vtasker.observability.log_utils import mask_token

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "auth_token"
LOCAL_STORAGE_FILE = "local_storage.json"


class TokenStore:
    """
    Token storage across local, session and cookie slots.

    Attributes:
        token_dir: Directory holding the local storage file
        cookies: Cookie jar, shared with the HTTP client
    """

    def __init__(self, token_dir: Path, cookies: httpx.Cookies | None = None) -> None:
        self.token_dir = Path(token_dir)
        self.cookies = cookies if cookies is not None else httpx.Cookies()
        self._session: dict[str, str] = {}

    @property
    def _local_path(self) -> Path:
        return self.token_dir / LOCAL_STORAGE_FILE

    def _read_local(self) -> dict:
        try:
            return json.loads(self._local_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Unreadable local token storage", extra={"error": str(e)})
            return {}

    def _write_local(self, data: dict) -> None:
        self.token_dir.mkdir(parents=True, exist_ok=True)
        self._local_path.write_text(json.dumps(data), encoding="utf-8")

    def store(self, token: str, remember_me: bool = False) -> None:
        """
        Save a token.

        remember_me keeps it in local storage, otherwise in session memory.
        The cookie is always set.
        """
        token = strip_bearer(token) or ""
        if remember_me:
            data = self._read_local()
            data[AUTH_TOKEN_KEY] = token
            self._write_local(data)
        else:
            self._session[AUTH_TOKEN_KEY] = token
        self.cookies.set(AUTH_TOKEN_KEY, token)
        logger.info(
            "Auth token stored",
            extra={"remember_me": remember_me, "token": mask_token(token)},
        )

    def local_token(self) -> str | None:
        return strip_bearer(self._read_local().get(AUTH_TOKEN_KEY))

    def session_token(self) -> str | None:
        return strip_bearer(self._session.get(AUTH_TOKEN_KEY))

    def cookie_token(self) -> str | None:
        return strip_bearer(self.cookies.get(AUTH_TOKEN_KEY))

    def get(self) -> str | None:
        """Current token: local, then session, then cookie."""
        return self.local_token() or self.session_token() or self.cookie_token()

    def clear(self) -> None:
        """Remove the token from every slot."""
        data = self._read_local()
        if AUTH_TOKEN_KEY in data:
            del data[AUTH_TOKEN_KEY]
            self._write_local(data)
        self._session.pop(AUTH_TOKEN_KEY, None)
        self.cookies.delete(AUTH_TOKEN_KEY)
        logger.info("Auth token cleared")

    def user_id(self) -> UUID | None:
        """
        user_id claim of the stored token.

        The payload is read without signature verification; the backend
        remains the authority. None for absent or malformed tokens.
        """
        token = self.get()
        if not token:
            return None
        try:
            payload = jwt.decode(token, options={"verify_signature": False})
            return UUID(str(payload["user_id"]))
        except (jwt.PyJWTError, KeyError, ValueError):
            logger.warning("Stored token has no readable user_id", extra={"token": mask_token(token)})
            return None

    def expires_at(self) -> datetime | None:
        """exp claim of the stored token as a UTC datetime, None when unreadable."""
        token = self.get()
        if not token:
            return None
        try:
            payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
            return datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (jwt.PyJWTError, KeyError, TypeError, ValueError):
            return None

    def is_remembered(self) -> bool:
        """Whether the active token lives in local storage."""
        return bool(self.local_token())

    def snapshot(self) -> dict[str, bool]:
        """Which slots currently hold a token."""
        return {
            "has_local": bool(self.local_token()),
            "has_session": bool(self.session_token()),
            "has_cookie": bool(self.cookie_token()),
        }
