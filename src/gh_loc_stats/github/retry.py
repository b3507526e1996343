"""Retry policy shared by the GitHub fetchers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

from ..logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def linear_backoff(step: float) -> Callable[[int], float]:
    """Backoff of ``attempt * step`` seconds."""
    return lambda attempt: attempt * step


def always_retry(exc: BaseException) -> bool:
    return True


@dataclass
class RetryPolicy:
    """How many times to try an operation and how long to wait in between.

    ``backoff`` receives the 1-based number of the attempt that just failed.
    Errors for which ``is_retryable`` returns False are raised immediately.
    """

    max_attempts: int = 3
    backoff: Callable[[int], float] = field(default=linear_backoff(2.0))
    is_retryable: Callable[[BaseException], bool] = always_retry
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def call(self, operation: Callable[[], Awaitable[T]], label: str = "") -> T:
        attempt = 1
        while True:
            try:
                return await operation()
            except Exception as exc:
                if attempt >= self.max_attempts or not self.is_retryable(exc):
                    raise
                logger.warning(
                    "Retrying request",
                    target=label,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error=str(exc),
                )
                await self.sleep(self.backoff(attempt))
                attempt += 1
