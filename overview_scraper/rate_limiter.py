"""
Pacing module for controlling request frequency.
Enforces a minimum interval between navigations and provides jittered waits.
"""

import asyncio
import logging
import random
import time
from typing import Awaitable, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class PacingController:
    """
    Enforces a minimum interval between gated navigations.

    The last-request timestamp is shared by every caller of this instance;
    the check-then-record sequence runs under a lock so concurrent callers
    are spaced out one after another.
    """

    def __init__(self, min_interval: float = 5.0, clock: Clock = time.monotonic, sleep: Sleep = asyncio.sleep):
        """
        Initialize pacing controller.

        Args:
            min_interval: Minimum seconds between the previous recorded request and the next gate release
            clock: Monotonic clock, injectable for tests
            sleep: Async sleep, injectable for tests
        """
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None
        self._lock = asyncio.Lock()
        logger.info(f"Pacing controller initialized: {min_interval}s minimum between requests")

    @property
    def last_request(self) -> Optional[float]:
        return self._last_request

    async def gate(self) -> None:
        """Wait until the minimum interval has elapsed, then record the new request time."""
        async with self._lock:
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                wait_time = self.min_interval - elapsed
                if wait_time > 0:
                    logger.info(f"⏳ Waiting {wait_time:.2f}s to avoid detection...")
                    await self._sleep(wait_time)
            self._last_request = self._clock()

    def record(self) -> None:
        """Record the completion of a navigation attempt."""
        self._last_request = self._clock()


async def jittered_delay(bounds: Tuple[float, float], sleep: Sleep = asyncio.sleep, label: str = "") -> float:
    """
    Wait a random amount of time inside ``bounds`` to mimic reading/interaction pauses.

    Returns:
        The delay that was applied, in seconds
    """
    low, high = bounds
    delay = random.uniform(low, high)
    if label:
        logger.info(f"⏳ {label}: {delay:.2f}s")
    else:
        logger.debug(f"Waiting {delay:.2f}s")
    await sleep(delay)
    return delay
