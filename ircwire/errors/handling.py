from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    ConnectionStateError,
    InternalError,
    NetworkError,
)


def classify_error(error: Exception) -> str:
    """Return the aggregation category used for *error*."""
    if isinstance(error, ConnectionStateError):
        return "connection"
    if isinstance(error, NetworkError | OSError):
        return "network"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The exception is categorised and forwarded to structured logging so
    recurring transport failures can be summarised at shutdown.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged = dict(context or {})
    if isinstance(error, InternalError) and error.data:
        for key, value in error.data.items():
            merged.setdefault(key, value)
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
