"""Fixed-delay retry for transient failures of async calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Substrings of an error message that mark it as transient
RETRYABLE_MARKERS = (
    "overloaded",
    "rate limit",
    "503",
    "429",
    "quota exceeded",
    "resource_exhausted",
)


def is_retryable_error(error: BaseException) -> bool:
    """True if the error message looks like overload, rate limiting or quota."""
    message = str(error).lower()
    return any(marker in message for marker in RETRYABLE_MARKERS)


async def retry_with_delay(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    delay: float = 3.0,
    is_retryable: Callable[[BaseException], bool] = is_retryable_error,
) -> T:
    """Await ``operation()`` up to ``max_retries + 1`` times.

    Only errors accepted by ``is_retryable`` are retried, after sleeping
    ``delay`` seconds. Anything else, or the last retryable error once
    attempts run out, is re-raised unchanged.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as e:
            if attempt >= max_retries or not is_retryable(e):
                raise
            attempt += 1
            logger.warning(
                "Retryable error (attempt %d/%d), retrying in %.1fs: %s",
                attempt, max_retries, delay, e,
            )
            await asyncio.sleep(delay)
