"""
Configuration constants for the ircwire client

This module contains the configurable defaults used throughout the client.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Outbound lines are cut to this many bytes before the CRLF terminator
IRC_MAX_MESSAGE_LENGTH = _get_env_int("IRC_MAX_MESSAGE_LENGTH", 400)

# Server endpoints
IRC_DEFAULT_PORT = _get_env_int("IRC_DEFAULT_PORT", 6667)
IRC_DEFAULT_TLS_PORT = _get_env_int("IRC_DEFAULT_TLS_PORT", 6697)

# Connection establishment
IRC_CONNECT_TIMEOUT = _get_env_float("IRC_CONNECT_TIMEOUT", 10.0)  # seconds
IRC_CONNECT_ATTEMPTS = _get_env_int("IRC_CONNECT_ATTEMPTS", 1)  # 1 = no retry
IRC_CONNECT_RETRY_MAX_WAIT = _get_env_float(
    "IRC_CONNECT_RETRY_MAX_WAIT", 30.0
)  # Upper bound of the exponential backoff between attempts

# Socket reads
IRC_RECV_BUFFER_SIZE = _get_env_int("IRC_RECV_BUFFER_SIZE", 4096)
# Unterminated input beyond this many bytes is discarded up to the next LF
IRC_MAX_LINE_BUFFER = _get_env_int("IRC_MAX_LINE_BUFFER", 8 * IRC_RECV_BUFFER_SIZE)

# Registration
DEFAULT_USER_MODE = os.getenv("DEFAULT_USER_MODE", "+i")

# Configuration file lookup
DEFAULT_CONFIG_FILE = "ircwire.conf"
CONFIG_FILE_ENV = "IRCWIRE_CONF_FILE"
