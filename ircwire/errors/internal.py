"""Centralized internal error hierarchy.

The parsing core never raises; these exceptions only surface from the
connection driver and the configuration layer.

Classes:
  InternalError            – Base for all internal errors.
  NetworkError             – Transport level failures.
  ShortWriteError          – A send wrote fewer bytes than requested.
  ConnectionStateError     – Operation invalid in the current connection state.
  AlreadyConnectedError    – Dial attempted while a connection is open.
  AlreadyDisconnectedError – Close attempted without an open connection.
  NotConnectedError        – Send or run attempted without a connection.
  ConfigError              – Missing or invalid configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for transport layer failures detected by the client."""


class ShortWriteError(NetworkError):
    """Exception raised when the socket accepted only part of a line.

    The connection is closed before this is raised; a partially written
    line leaves the server-side parser in an unknown state.
    """

    def __init__(self, sent: int, expected: int) -> None:
        super().__init__(
            f"short write: {sent} of {expected} bytes",
            data={"sent": sent, "expected": expected},
        )
        self.sent = sent
        self.expected = expected


class ConnectionStateError(InternalError):
    """Base for errors caused by calling an operation in the wrong state."""


class AlreadyConnectedError(ConnectionStateError):
    def __init__(self, message: str = "already connected") -> None:
        super().__init__(message)


class AlreadyDisconnectedError(ConnectionStateError):
    def __init__(self, message: str = "already disconnected") -> None:
        super().__init__(message)


class NotConnectedError(ConnectionStateError):
    def __init__(self, message: str = "not connected") -> None:
        super().__init__(message)


class ConfigError(InternalError):
    """Exception raised when the client configuration is missing or invalid."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ShortWriteError",
    "ConnectionStateError",
    "AlreadyConnectedError",
    "AlreadyDisconnectedError",
    "NotConnectedError",
    "ConfigError",
]
