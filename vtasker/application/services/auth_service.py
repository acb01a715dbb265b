"""
Auth service orchestrator.

Coordinates registration, sign-in with lockout, bearer token
authentication, token rotation and server-side session management.

Dependencies: vtasker.boundary.db.CRUD, vtasker.core.security, vtasker.configs
System role: Authentication use case orchestration
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.base import as_utc, utcnow
from vtasker.boundary.db.CRUD.auth_session_crud import auth_session_crud
from vtasker.boundary.db.CRUD.user_crud import user_crud
from vtasker.boundary.db.models.auth_session_model import AuthSessionModel
from vtasker.boundary.db.models.user_model import UserModel
from vtasker.configs import get_settings
from vtasker.configs.auth import AuthSettings
from vtasker.core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from vtasker.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    hash_token,
    verify_password,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller resolved from a bearer token."""

    id: UUID
    email: str
    session_id: UUID


def user_summary(user: UserModel) -> dict:
    """Fields returned next to a freshly issued token."""
    return {"id": user.id, "email": user.email, "name": user.name}


class AuthService:
    """Auth service orchestrator."""

    def __init__(self, db: AsyncSession, settings: AuthSettings | None = None) -> None:
        """
        Initialize auth service with async database session.

        Args:
            db: Async SQLAlchemy session
            settings: Auth policy, defaults to the application settings
        """
        self.db = db
        self.settings = settings or get_settings().auth

    def validate_password(self, password: str) -> None:
        """
        Enforce the password length policy.

        Raises:
            ValidationError: Password shorter than the minimum or longer than
                bcrypt's 72 byte limit
        """
        if len(password) < self.settings.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.settings.min_password_length} characters",
                field="password",
            )
        if len(password.encode("utf-8")) > self.settings.max_password_length:
            raise ValidationError(
                f"Password must be at most {self.settings.max_password_length} bytes",
                field="password",
            )

    async def check_email(self, email: str) -> bool:
        """Whether an account exists for this email (case-insensitive)."""
        return await user_crud.email_exists(self.db, email)

    async def sign_up(
        self,
        email: str,
        password: str,
        name: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Register a user and sign them in.

        Args:
            email: Login email
            password: Plain-text password
            name: Display name
            user_agent: Client User-Agent for the new session
            ip_address: Client address for the new session

        Returns:
            dict: {"token", "user": {id, email, name}}

        Raises:
            ValidationError: Password policy violated
            ConflictError: Email already registered
        """
        self.validate_password(password)
        if await user_crud.email_exists(self.db, email):
            raise ConflictError("Email already registered", {"email": email.strip().lower()})

        try:
            user = await user_crud.create(
                self.db,
                email=email.strip().lower(),
                password_hash=hash_password(password, self.settings.bcrypt_rounds),
                name=name.strip(),
            )
            token, _ = await self._open_session(
                user,
                timedelta(hours=self.settings.token_ttl_hours),
                user_agent,
                ip_address,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to register user", extra={"error": str(e)})
            raise

        logger.info("User registered", extra={"user_id": str(user.id)})
        return {"token": token, "user": user_summary(user)}

    async def sign_in(
        self,
        email: str,
        password: str,
        remember_me: bool = False,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Verify credentials and open a session.

        A wrong password increments the failure counter; reaching the
        configured maximum locks the account for lockout_minutes. An
        expired lock is cleared together with the counter.

        Returns:
            dict: {"token", "user": {id, email, name}}

        Raises:
            AuthenticationError: Unknown email or wrong password
            AccountLockedError: Account is locked
        """
        user = await user_crud.get_by_email(self.db, email)
        if user is None:
            logger.warning("Sign-in for unknown email")
            raise AuthenticationError("Invalid credentials")

        now = utcnow()
        locked_until = as_utc(user.locked_until)
        if locked_until is not None and locked_until > now:
            logger.warning("Sign-in on locked account", extra={"user_id": str(user.id)})
            raise AccountLockedError(
                "Account is locked due to too many failed attempts",
                {"locked_until": locked_until.isoformat()},
            )
        if locked_until is not None:
            # Lock has run out: start counting failures afresh.
            user.failed_login_attempts = 0
            user.locked_until = None

        if not verify_password(password, user.password_hash):
            user.failed_login_attempts += 1
            if user.failed_login_attempts >= self.settings.max_failed_logins:
                user.locked_until = now + timedelta(minutes=self.settings.lockout_minutes)
                logger.warning(
                    "Account locked after failed sign-ins",
                    extra={"user_id": str(user.id), "attempts": user.failed_login_attempts},
                )
            await self.db.commit()
            raise AuthenticationError("Invalid credentials")

        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login_at = now
        ttl = (
            timedelta(days=self.settings.remember_me_ttl_days)
            if remember_me
            else timedelta(hours=self.settings.token_ttl_hours)
        )
        try:
            token, session = await self._open_session(user, ttl, user_agent, ip_address)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to open session", extra={"error": str(e), "user_id": str(user.id)})
            raise

        logger.info(
            "User signed in",
            extra={"user_id": str(user.id), "session_id": str(session.id), "remember_me": remember_me},
        )
        return {"token": token, "user": user_summary(user)}

    async def _open_session(
        self,
        user: UserModel,
        ttl: timedelta,
        user_agent: str | None,
        ip_address: str | None,
    ) -> tuple[str, AuthSessionModel]:
        session_id = uuid.uuid4()
        now = utcnow()
        token = create_access_token(user.id, user.email, ttl, session_id=session_id, now=now)
        session = await auth_session_crud.create(
            self.db,
            id=session_id,
            user_id=user.id,
            token_hash=hash_token(token),
            user_agent=(user_agent or "")[:512] or None,
            ip_address=ip_address,
            last_used_at=now,
            expires_at=now + ttl,
        )
        return token, session

    async def authenticate(self, token: str) -> CurrentUser:
        """
        Resolve a bearer token to the calling user.

        The token must verify and match an active session. The session's
        last_used_at is refreshed.

        Raises:
            AuthenticationError: Invalid token, or no active session
        """
        payload = decode_access_token(token)
        now = utcnow()
        session = await auth_session_crud.get_active_by_token_hash(self.db, hash_token(token), now)
        if session is None:
            raise AuthenticationError("Session expired or revoked")

        session.last_used_at = now
        await self.db.commit()
        return CurrentUser(
            id=UUID(payload["user_id"]),
            email=payload.get("email", ""),
            session_id=session.id,
        )

    async def refresh(
        self,
        current: CurrentUser,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Rotate the caller's session token.

        The current session is revoked and a new one is opened with the
        same lifetime, so remember-me sessions stay long-lived.

        Returns:
            dict: {"token", "user": {id, email, name}}

        Raises:
            AuthenticationError: Session or user no longer exists
        """
        session = await auth_session_crud.get_by_id(self.db, current.session_id)
        user = await user_crud.get_by_id(self.db, current.id)
        if session is None or session.revoked_at is not None or user is None:
            raise AuthenticationError("Session expired or revoked")

        now = utcnow()
        ttl = as_utc(session.expires_at) - as_utc(session.created_at)
        try:
            session.revoked_at = now
            token, new_session = await self._open_session(
                user,
                ttl,
                user_agent or session.user_agent,
                ip_address or session.ip_address,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to refresh session", extra={"error": str(e), "user_id": str(user.id)})
            raise

        logger.info(
            "Session refreshed",
            extra={
                "user_id": str(user.id),
                "old_session_id": str(session.id),
                "session_id": str(new_session.id),
            },
        )
        return {"token": token, "user": user_summary(user)}

    async def sign_out(self, current: CurrentUser) -> None:
        """Revoke the caller's current session."""
        session = await auth_session_crud.get_by_id(self.db, current.session_id)
        if session is not None and session.revoked_at is None:
            session.revoked_at = utcnow()
            await self.db.commit()
        logger.info("User signed out", extra={"user_id": str(current.id)})

    async def list_sessions(self, current: CurrentUser) -> list[dict]:
        """
        Active sessions of the caller.

        Returns:
            list[dict]: id, user_agent, ip_address, last_used, current
        """
        sessions = await auth_session_crud.list_active_for_user(self.db, current.id, utcnow())
        return [
            {
                "id": s.id,
                "user_agent": s.user_agent,
                "ip_address": s.ip_address,
                "last_used": as_utc(s.last_used_at),
                "current": s.id == current.session_id,
            }
            for s in sessions
        ]

    async def revoke_session(self, current: CurrentUser, session_id: UUID) -> None:
        """
        Revoke one of the caller's other sessions.

        Raises:
            ValidationError: session_id is the current session
            NotFoundError: No active session with that id for this user
        """
        if session_id == current.session_id:
            raise ValidationError("Cannot revoke current session", field="sessionId")

        session = await auth_session_crud.get_by_id(self.db, session_id)
        if session is None or session.user_id != current.id or session.revoked_at is not None:
            raise NotFoundError("session", session_id)

        session.revoked_at = utcnow()
        await self.db.commit()
        logger.info(
            "Session revoked",
            extra={"user_id": str(current.id), "session_id": str(session_id)},
        )

    async def revoke_other_sessions(self, current: CurrentUser) -> int:
        """Revoke every session of the caller except the current one."""
        revoked = await auth_session_crud.revoke_all_except(
            self.db, current.id, current.session_id, utcnow()
        )
        await self.db.commit()
        logger.info(
            "Other sessions revoked",
            extra={"user_id": str(current.id), "revoked_count": revoked},
        )
        return revoked
