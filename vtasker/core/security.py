"""
Password hashing and token primitives.

bcrypt for passwords, HS256 JWTs for access tokens, sha256 digests for
storing session tokens.

Dependencies: bcrypt, PyJWT, hashlib
System role: Credential handling for the auth service
"""

import hashlib
import re
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import bcrypt
import jwt

from vtasker.configs import get_settings
from vtasker.core.exceptions import AuthenticationError

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plain-text password (at most 72 bytes are significant)
        rounds: Cost factor, defaults to the configured value

    Returns:
        str: bcrypt hash
    """
    cost = rounds or get_settings().auth.bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    user_id: UUID,
    email: str,
    expires_in: timedelta,
    session_id: UUID | None = None,
    now: datetime | None = None,
) -> str:
    """
    Issue a signed access token.

    Args:
        user_id: Subject user ID
        email: Subject email
        expires_in: Token lifetime
        session_id: Server-side session, carried as the jti claim
        now: Issue time override (tests)

    Returns:
        str: Encoded JWT carrying user_id and email claims
    """
    auth = get_settings().auth
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "user_id": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    if session_id is not None:
        payload["jti"] = str(session_id)
    return jwt.encode(payload, auth.jwt_secret, algorithm=auth.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        AuthenticationError: Expired, malformed or badly signed token
    """
    auth = get_settings().auth
    try:
        payload = jwt.decode(token, auth.jwt_secret, algorithms=[auth.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid token") from e

    if "user_id" not in payload:
        raise AuthenticationError("Invalid token", {"reason": "missing user_id claim"})
    return payload


def hash_token(token: str) -> str:
    """sha256 hex digest of a token, used as the session lookup key."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def strip_bearer(value: str | None) -> str | None:
    """Remove a leading "Bearer " (any case) and surrounding whitespace."""
    if value is None:
        return None
    stripped = _BEARER_PREFIX.sub("", value.strip()).strip()
    return stripped or None
