from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def compute_backoff(attempt: int, base: float = 0.5, jitter: float = 0.25) -> float:
    """Delay before retry number ``attempt`` (0-based): ``base * 2**attempt`` plus jitter."""
    return base * (2**attempt) + random.uniform(0, jitter)


async def schedule_retry(attempt: int) -> None:
    """Sleep for computed backoff delay before retrying."""
    await asyncio.sleep(compute_backoff(attempt))


async def with_retries(
    operation: Callable[[], Awaitable[T]],
    max_retries: int,
    should_retry: Callable[[Exception], bool],
    description: str = "request",
) -> T:
    """Await ``operation``, retrying up to ``max_retries`` times.

    Only exceptions accepted by ``should_retry`` are retried; the last one is
    re-raised once retries run out.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            if attempt >= max_retries or not should_retry(exc):
                raise
            logger.warning(
                f"{description} failed ({exc}); retry {attempt + 1}/{max_retries}"
            )
            await schedule_retry(attempt)
            attempt += 1
