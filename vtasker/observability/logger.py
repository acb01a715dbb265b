"""
Logging configuration for the API and the gateway.

One stdout handler on the root logger, every line tagged with the active
correlation ID.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from vtasker.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s [%(correlation_id)s] - %(message)s"
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


class _VTaskerHandler(logging.StreamHandler):
    """Marker type so reconfiguring replaces only our own handler."""


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler on the root logger.

    Safe to call again (each app factory does): the previous vTasker
    handler is swapped out and foreign handlers are left alone.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if isinstance(handler, _VTaskerHandler):
            root_logger.removeHandler(handler)

    handler = _VTaskerHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
