"""
Async helpers for calls to the language-model service.

Provides:
- async_retry: retry decorator with exponential backoff and jitter
"""

from __future__ import annotations

import asyncio
import logging
from functools import wraps
from typing import TYPE_CHECKING, Any, TypeVar

from .exceptions import get_retry_delay, is_retryable_error

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def async_retry(
    max_attempts: int = 3,
    retryable_check: Callable[[Exception], bool] = is_retryable_error,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for async functions with automatic retry.

    Uses exponential backoff with jitter. Non-retryable errors propagate
    immediately; the last retryable error propagates once attempts run out.

    Example:
        @async_retry(max_attempts=3)
        async def complete(messages: list[dict]) -> str:
            ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not retryable_check(e) or attempt == max_attempts - 1:
                        raise

                    delay = get_retry_delay(e, attempt)
                    logger.warning(
                        f"Retry {attempt + 1}/{max_attempts} for {func.__name__}: {e} (waiting {delay:.1f}s)"
                    )
                    await asyncio.sleep(delay)

            raise RuntimeError("Unexpected retry loop exit")

        return wrapper

    return decorator


