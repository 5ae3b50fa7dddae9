"""
Async Utilities for upstream calls.

Provides:
- Retry with exponential backoff
- Per-call deadlines that surface as ServiceUnavailableError
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from .exceptions import (
    ServiceUnavailableError,
    get_retry_delay,
    is_retryable_error,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Retry Decorator
# =============================================================================

def async_retry(
    max_attempts: int = 3,
    retryable_check: Callable[[Exception], bool] = is_retryable_error,
    base_delay: float = 0.5,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for async functions with automatic retry.

    Uses exponential backoff with jitter. Cancellation is never retried.

    Example:
        @async_retry(max_attempts=2)
        async def fetch_token(query: str) -> str:
            ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempts = max(1, max_attempts)
            last_error: Exception | None = None

            for attempt in range(attempts):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    last_error = e

                    if not retryable_check(e) or attempt == attempts - 1:
                        raise

                    delay = get_retry_delay(attempt, base_delay)
                    logger.warning(
                        f"Retry {attempt + 1}/{attempts} for {func.__name__}: "
                        f"{e} (waiting {delay:.1f}s)"
                    )
                    await asyncio.sleep(delay)

            # Should not reach here, but for type safety
            if last_error:
                raise last_error
            raise RuntimeError("Unexpected retry loop exit")

        return wrapper
    return decorator


# =============================================================================
# Deadlines
# =============================================================================

async def with_deadline(
    coro: Awaitable[T],
    timeout: float,
    *,
    operation: str,
    service: str = "duckduckgo.com",
) -> T:
    """
    Await ``coro`` for at most ``timeout`` seconds.

    A missed deadline becomes ServiceUnavailableError; caller cancellation
    propagates unchanged.
    """
    try:
        async with asyncio.timeout(timeout):
            return await coro
    except TimeoutError as e:
        logger.warning(f"{operation} timed out after {timeout}s")
        raise ServiceUnavailableError(
            f"Request timeout after {timeout}s",
            service=service,
            cause=f"timeout after {timeout}s",
            operation=operation,
        ) from e
