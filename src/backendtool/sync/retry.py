"""Retry logic with exponential backoff for single sync operations.

This module provides:
- backoff_delay: Delay before a given attempt
- describe_error: Error detail including any drained HTTP response body
- run_with_retries: Run one unit of work under the fixed retry policy
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import httpx

from backendtool.backends.base import TransportError
from backendtool.sync.types import (
    AttemptCallback,
    RetryExhaustedError,
    SyncCancelledError,
)

logger = logging.getLogger(__name__)

# Default retry configuration
MAX_ATTEMPTS = 3  # 1 initial + 2 retries
BACKOFF_BASE = 100
BACKOFF_UNIT = 0.001  # seconds (backoff is counted in milliseconds)


def backoff_delay(
    attempt: int, base: float = BACKOFF_BASE, unit: float = BACKOFF_UNIT
) -> float:
    """Seconds to sleep before the zero-based attempt.

    Attempt 0 runs immediately; attempt k waits base**k units.
    """
    if attempt <= 0:
        return 0.0
    return (base**attempt) * unit


def _response_body(error: BaseException) -> str | None:
    response: httpx.Response | None = None
    if isinstance(error, TransportError):
        response = error.response
    elif isinstance(error, httpx.HTTPStatusError):
        response = error.response
    if response is None:
        return None
    try:
        return response.read().decode(response.encoding or "utf-8", errors="replace")
    except (httpx.HTTPError, httpx.StreamError) as e:
        return f"<response body unavailable: {e}>"


def describe_error(error: BaseException) -> str:
    """One-line error description, followed by the response body if any."""
    detail = f"{type(error).__name__} '{error}'"
    body = _response_body(error)
    if body:
        detail = f"{detail}\n{body}"
    return detail


def run_with_retries(
    work: Callable[[], Any],
    on_attempt: AttemptCallback | None = None,
    max_attempts: int = MAX_ATTEMPTS,
    backoff_base: float = BACKOFF_BASE,
    backoff_unit: float = BACKOFF_UNIT,
    cancel_event: threading.Event | None = None,
) -> int:
    """Execute a unit of work, retrying on any error.

    Every exception counts as retryable. Failures are logged with their
    traceback (and drained HTTP response body) on each attempt.

    Args:
        work: Function performing one copy or delete.
        on_attempt: Called with the attempt index before each attempt.
        max_attempts: Total number of attempts.
        backoff_base: Base of the exponential backoff.
        backoff_unit: Length of one backoff unit in seconds.
        cancel_event: When set, stops before the next attempt.

    Returns:
        Number of retries used before the work succeeded.

    Raises:
        RetryExhaustedError: If every attempt failed.
        SyncCancelledError: If cancel_event was set.
    """
    last_exception: Exception | None = None

    for attempt in range(max_attempts):
        if attempt > 0:
            time.sleep(backoff_delay(attempt, backoff_base, backoff_unit))
        if cancel_event is not None and cancel_event.is_set():
            raise SyncCancelledError("Sync cancelled")

        try:
            if on_attempt is not None:
                on_attempt(attempt)
            work()
            return attempt
        except Exception as e:
            last_exception = e
            logger.warning(
                f"Caught {describe_error(e)} and retrying "
                f"(attempt {attempt + 1}/{max_attempts})",
                exc_info=True,
            )

    logger.error(f"All {max_attempts} attempts failed: {last_exception}")
    raise RetryExhaustedError("Sync failed - retry count exceeded") from last_exception
