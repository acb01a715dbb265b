"""
Structured logging helpers.

Context passed as keyword arguments becomes LogRecord attributes. Values
are flattened to short strings, and keys that carry credentials are
masked before they reach any handler.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_VALUE_LENGTH = 500
SENSITIVE_KEYS = frozenset({"password", "token", "authorization", "jwt_secret"})


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Short string form of a log context value.

    Collections are summarised by size rather than dumped.
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        text = value
    elif isinstance(value, (list, tuple, set)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def mask_token(token: str | None, visible: int = 6) -> str:
    """
    Bearer token reduced to its first characters.

    Returns:
        str: "none" when absent, "***" when too short to show a prefix
    """
    if not token:
        return "none"
    if len(token) <= visible:
        return "***"
    return f"{token[:visible]}..."


def _context(context: dict[str, Any]) -> dict[str, str]:
    return {
        key: mask_token(str(value) if value else None) if key.lower() in SENSITIVE_KEYS else safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """
    Log message with context attached as record attributes.

    Usage:
        log_with_context(logger, logging.WARNING, "Upstream slow", path=path, elapsed_ms=812)
    """
    logger.log(level, message, extra=_context(context))


def log_exception_with_context(logger: logging.Logger, message: str, exc: Exception, **context) -> None:
    """Log at ERROR with the traceback, the exception type and its message."""
    extra = _context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = str(exc)
    logger.exception(message, extra=extra)
