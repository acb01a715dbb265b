"""Python SDK for the vTasker API."""

from .api_client import ApiError, VTaskerClient
from .auth_flow import AuthFlow, AuthStep, InvalidAuthStepError
from .debug import AuthDebugMonitor, AuthStatus
from .token_store import TokenStore

__all__ = [
    "ApiError",
    "AuthDebugMonitor",
    "AuthFlow",
    "AuthStatus",
    "AuthStep",
    "InvalidAuthStepError",
    "TokenStore",
    "VTaskerClient",
]
