"""Retry utilities for connection establishment using Tenacity."""

import logging
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..logs.logger import logger

T = TypeVar("T")


def retry_transport(
    operation: Callable[[], T],
    max_attempts: int = 1,
    max_wait: float = 30.0,
    description: str = "operation",
) -> T:
    """Run *operation*, retrying on ``OSError`` with exponential backoff.

    Args:
        operation: Callable performing the transport operation.
        max_attempts: Total attempts including the first; 1 disables retries.
        max_wait: Upper bound in seconds of the wait between attempts.
        description: Label used in retry log events.

    Returns:
        Whatever *operation* returns.

    Raises:
        OSError: The error from the last attempt, unchanged.
    """

    def before_sleep(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        logger.log_event(
            "retry",
            "attempt_failed",
            level=logging.WARNING,
            operation=description,
            attempt=retry_state.attempt_number,
            max_attempts=max_attempts,
            error=str(error),
        )

    retrying = Retrying(
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential(multiplier=1, max=max_wait),
        retry=retry_if_exception_type(OSError),
        before_sleep=before_sleep,
        reraise=True,
    )
    return retrying(operation)
