"""
Retry with exponential backoff for transient network failures.

Used around calls into the analysis engine, which may be briefly unreachable.
"""

import asyncio
import random
from typing import Any, Awaitable, Callable, Tuple, Type, TypeVar

from repopages.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_RETRYABLE_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
)


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_retries: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 10.0,
    jitter: bool = True,
    retryable_exceptions: Tuple[Type[Exception], ...] = DEFAULT_RETRYABLE_EXCEPTIONS,
    **kwargs: Any,
) -> T:
    """
    Await `func(*args, **kwargs)`, retrying on `retryable_exceptions`.

    Raises:
        The last exception if all retries are exhausted; anything not listed
        in `retryable_exceptions` immediately.
    """
    name = getattr(func, "__name__", repr(func))

    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except retryable_exceptions as e:
            if attempt == max_retries:
                logger.error(f"All {max_retries + 1} attempts failed for {name}: {e}")
                raise

            delay = min(base_delay * (2 ** attempt), max_delay)
            if jitter:
                delay = delay * (0.5 + random.random())

            logger.warning(
                f"Attempt {attempt + 1}/{max_retries + 1} failed for {name}: {e}. "
                f"Retrying in {delay:.2f}s..."
            )
            await asyncio.sleep(delay)

    raise RuntimeError("Unexpected state in retry_with_backoff")
