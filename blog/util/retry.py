"""Retry with exponential backoff for transient store errors.

Only ``StoreUnavailableError`` is retried, and not when the store rolled
back the request's transaction. Business errors (validation, not found,
forbidden) propagate on the first attempt.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

import logfire

from blog.config import StoreSettings
from blog.domain.error import StoreUnavailableError

T = TypeVar("T")


def backoff_delay(attempt: int, settings: StoreSettings) -> float:
    """Delay before the retry that follows ``attempt`` (1-based)."""
    return min(settings.retry_base_delay * (2 ** (attempt - 1)), settings.retry_max_delay)


async def with_retry(
    operation: str,
    call: Callable[[], Awaitable[T]],
    settings: StoreSettings,
) -> T:
    """Run a store call, retrying transient failures.

    Args:
        operation: Operation name used in logs
        call: Zero-argument coroutine factory performing the store call
        settings: Retry policy

    Returns:
        Result of the store call

    Raises:
        StoreUnavailableError: If every attempt failed
    """
    attempts = max(settings.retry_attempts, 1)
    for attempt in range(1, attempts + 1):
        try:
            return await call()
        except StoreUnavailableError as e:
            if e.rolled_back:
                # The request transaction is already aborted
                logfire.error(
                    "Store call failed, transaction rolled back",
                    operation=operation,
                    attempt=attempt,
                    error=str(e),
                )
                raise
            if attempt == attempts:
                logfire.error(
                    "Store call failed, retries exhausted",
                    operation=operation,
                    attempts=attempts,
                    error=str(e),
                )
                raise
            delay = backoff_delay(attempt, settings)
            logfire.warn(
                "Transient store error, retrying",
                operation=operation,
                attempt=attempt,
                delay=delay,
                error=str(e),
            )
            await asyncio.sleep(delay)

    # Unreachable: the loop either returns or raises
    raise StoreUnavailableError(operation)
