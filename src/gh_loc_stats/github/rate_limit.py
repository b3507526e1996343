"""Self-tracked request throttle for the GitHub API."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable

from ..logging import get_logger

logger = get_logger(__name__)

BASE_DELAY = 0.1
ESCALATED_DELAY = 0.15
ESCALATION_THRESHOLD = 100
WAIT_LOG_INTERVAL = 5.0


class RequestThrottle:
    """Keep the sustained request rate under a per-hour ceiling.

    The rate is estimated from the number of calls made since the throttle
    was created, not from GitHub's rate limit headers. Every call also pays a
    small fixed delay, which grows once more than 100 calls have been made.
    """

    def __init__(
        self,
        max_requests_per_hour: int = 4800,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.max_requests_per_hour = max_requests_per_hour
        self.request_count = 0
        self._clock = clock
        self._sleep = sleep
        self._start = clock()
        self._last_wait_log: float | None = None

    @property
    def elapsed(self) -> float:
        """Seconds since the throttle was created."""
        return self._clock() - self._start

    def required_wait(self) -> float:
        """Seconds to wait so that request_count / elapsed stays under the ceiling."""
        elapsed = self.elapsed
        elapsed_hours = elapsed / 3600
        rate = self.request_count / elapsed_hours if elapsed_hours > 0 else float("inf")
        if rate <= self.max_requests_per_hour:
            return 0.0
        budget = self.request_count / self.max_requests_per_hour * 3600
        return max(0.0, budget - elapsed)

    def base_delay(self) -> float:
        return ESCALATED_DELAY if self.request_count > ESCALATION_THRESHOLD else BASE_DELAY

    async def throttle(self) -> None:
        """Account for one outbound request, sleeping as needed."""
        self.request_count += 1

        wait = self.required_wait()
        if wait > 0:
            now = self._clock()
            if self._last_wait_log is None or now - self._last_wait_log >= WAIT_LOG_INTERVAL:
                logger.info(
                    "Rate limit protection hit, waiting",
                    wait_seconds=round(wait, 2),
                    requests=self.request_count,
                )
                self._last_wait_log = now
            await self._sleep(wait)

        await self._sleep(self.base_delay())
