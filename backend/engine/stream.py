import logging
import contextvars
from contextlib import asynccontextmanager
from typing import Optional

from backend.core import settings

# Include request_id in the log format; filled by RequestContextFilter
default_format = "%(asctime)s - %(levelname)s - [%(request_id)s] - %(message)s"

# Context variable carrying the current request id (per task)
current_request_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


class RequestContextFilter(logging.Filter):
    """Injects request_id from contextvar into every record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        req_id = current_request_id.get()
        # Always set attribute to avoid KeyError in formatters
        record.request_id = req_id or "-"  # type: ignore[attr-defined]
        return True


def setup_logger(name=None, level=None, format_str=None):
    logger = logging.getLogger(name)
    logger.setLevel(level or settings.LOG_LEVEL.upper())

    # Clear existing handlers to avoid duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(format_str or default_format))
    logger.addHandler(console_handler)

    # Ensure request_id is available on all records
    logger.addFilter(RequestContextFilter())

    # Prevent propagation to root to avoid duplicate logs
    logger.propagate = False

    return logger


# Default application logger
app_logger = setup_logger("attendance")


@asynccontextmanager
async def request_logging_context(request_id: str):
    """Async context manager to scope logs to a specific request.

    All logs within this context carry request_id in their formatted output.
    """
    token = current_request_id.set(request_id)
    try:
        yield
    finally:
        current_request_id.reset(token)
