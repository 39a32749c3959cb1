"""Error hierarchy and error logging helpers."""

from .handling import classify_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    AlreadyConnectedError,
    AlreadyDisconnectedError,
    ConfigError,
    ConnectionStateError,
    InternalError,
    NetworkError,
    NotConnectedError,
    ShortWriteError,
)

__all__ = [
    "AlreadyConnectedError",
    "AlreadyDisconnectedError",
    "ConfigError",
    "ConnectionStateError",
    "InternalError",
    "NetworkError",
    "NotConnectedError",
    "ShortWriteError",
    "classify_error",
    "log_error",
]
