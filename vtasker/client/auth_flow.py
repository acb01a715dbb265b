"""
Email-first sign-in flow.

The user enters an email; a known address leads to the password step,
an unknown one to registration. Both end authenticated with the token
stored and a return URL to navigate to.

Dependencies: vtasker.client.api_client
System role: Client-side authentication state machine
"""

import logging
from enum import Enum
from urllib.parse import unquote

from vtasker.client.api_client import ApiError, VTaskerClient

logger = logging.getLogger(__name__)

DEFAULT_RETURN_URL = "/dashboard"

EMAIL_ERROR = "An error occurred. Please try again."
LOGIN_ERROR = "Invalid credentials. Please try again."
REGISTER_ERROR = "An error occurred during registration. Please try again."
LOGIN_SUCCESS = "You have been successfully logged in."
REGISTER_SUCCESS = "You have been successfully registered and logged in."


class AuthStep(str, Enum):
    EMAIL = "email"
    LOGIN = "login"
    REGISTER = "register"
    AUTHENTICATED = "authenticated"


class InvalidAuthStepError(Exception):
    """An action was attempted from the wrong step."""

    def __init__(self, action: str, step: AuthStep) -> None:
        self.action = action
        self.step = step
        super().__init__(f"Cannot {action} from step '{step.value}'")


class AuthFlow:
    """
    Authentication state machine.

    Attributes:
        step: Current AuthStep
        email: Address entered in the email step
        error: Last failure message shown to the user, None after success
        message: Last success message
        user: Signed-in user summary
        return_url: Decoded navigation target after authentication
    """

    def __init__(self, client: VTaskerClient, return_url: str | None = None) -> None:
        self.client = client
        self.return_url = unquote(return_url) if return_url else DEFAULT_RETURN_URL
        self.step = AuthStep.EMAIL
        self.email: str | None = None
        self.error: str | None = None
        self.message: str | None = None
        self.user: dict | None = None

    @property
    def authenticated(self) -> bool:
        return self.step == AuthStep.AUTHENTICATED

    def _require(self, action: str, *steps: AuthStep) -> None:
        if self.step not in steps:
            raise InvalidAuthStepError(action, self.step)

    def submit_email(self, email: str) -> AuthStep:
        """Check the address and move to LOGIN or REGISTER."""
        self._require("submit email", AuthStep.EMAIL)
        email = email.strip()
        try:
            exists = self.client.check_email(email)
        except ApiError as e:
            logger.warning("Email check failed", extra={"status_code": e.status_code})
            self.error = EMAIL_ERROR
            return self.step

        self.email = email
        self.error = None
        self.step = AuthStep.LOGIN if exists else AuthStep.REGISTER
        logger.info("Email step complete", extra={"next_step": self.step.value})
        return self.step

    def submit_login(self, password: str, remember_me: bool = False) -> AuthStep:
        self._require("sign in", AuthStep.LOGIN)
        try:
            result = self.client.sign_in(self.email, password, remember_me=remember_me)
        except ApiError as e:
            logger.info("Sign-in rejected", extra={"status_code": e.status_code})
            self.error = LOGIN_ERROR
            return self.step
        return self._complete(result, LOGIN_SUCCESS)

    def submit_registration(self, name: str, password: str) -> AuthStep:
        """Register; the token is always kept in persistent storage."""
        self._require("register", AuthStep.REGISTER)
        try:
            result = self.client.sign_up(self.email, password, name)
        except ApiError as e:
            logger.info("Registration rejected", extra={"status_code": e.status_code})
            self.error = REGISTER_ERROR
            return self.step
        return self._complete(result, REGISTER_SUCCESS)

    def _complete(self, result: dict, message: str) -> AuthStep:
        self.user = result.get("user")
        self.error = None
        self.message = message
        self.step = AuthStep.AUTHENTICATED
        logger.info("Authenticated", extra={"return_url": self.return_url})
        return self.step

    def back(self) -> AuthStep:
        """Return to the email step from LOGIN or REGISTER."""
        self._require("go back", AuthStep.LOGIN, AuthStep.REGISTER)
        self.step = AuthStep.EMAIL
        self.error = None
        return self.step

    def sign_out(self) -> AuthStep:
        """
        Revoke the session when a token is present and reset to EMAIL.

        Local tokens are cleared even when the revoke call fails.
        """
        if self.client.tokens.get():
            try:
                self.client.sign_out()
            except ApiError as e:
                logger.warning("Sign-out revoke failed", extra={"status_code": e.status_code})
        else:
            self.client.tokens.clear()
        self.step = AuthStep.EMAIL
        self.user = None
        self.message = None
        self.error = None
        return self.step
