"""Retry handler with exponential backoff for corpus fetches."""

import asyncio
import random
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger

from browser_headers.exceptions import SourceFetchError

T = TypeVar("T")


class RetryHandler:
    """
    Retries a coroutine function that fails with a transient fetch error.

    The pool and composer never retry on their own. Callers that want
    resilience wrap initialize() with this handler.
    """

    RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (SourceFetchError,)

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self._sleep = sleep

    async def execute(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Execute a coroutine function with retry logic.

        Args:
            func: The async function to execute
            *args: Positional arguments for the function
            **kwargs: Keyword arguments for the function

        Returns:
            The result of the function

        Raises:
            The last exception if all retries are exhausted
        """
        for attempt in range(self.max_retries + 1):
            try:
                return await func(*args, **kwargs)
            except self.RETRYABLE_EXCEPTIONS as e:
                if attempt >= self.max_retries:
                    logger.error(f"Final retry attempt failed: {e}")
                    raise

                delay = self._calculate_delay(attempt)
                logger.warning(
                    f"Attempt {attempt + 1}/{self.max_retries + 1} failed: {e}. "
                    f"Retrying in {delay:.2f}s..."
                )
                await self._sleep(delay)

        raise RuntimeError("unreachable")

    def _calculate_delay(self, attempt: int) -> float:
        """Calculate the delay for a retry attempt using exponential backoff."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        # Add jitter (+/-25%)
        jitter = delay * 0.25 * (2 * random.random() - 1)
        delay = min(delay + jitter, self.max_delay)
        return max(0.1, delay)
