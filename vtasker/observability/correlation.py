"""
Request correlation IDs.

The API and the gateway bind one ID per request in a context variable;
the log filter stamps it on every record and the gateway forwards it
upstream in X-Correlation-ID, so one user action can be followed across
both services.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextvars import ContextVar, Token

CORRELATION_HEADER = "X-Correlation-ID"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def bind_correlation_id(incoming: str | None = None) -> tuple[str, Token[str]]:
    """
    Bind the caller's ID, or a fresh uuid4 when there is none.

    Returns:
        (bound ID, token for reset_correlation_id)
    """
    value = (incoming or "").strip() or str(uuid.uuid4())
    return value, _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def get_correlation_id() -> str:
    """Bound ID, or an empty string outside a request."""
    return _correlation_id.get()
