"""
Polling scheduler shared by the discovery and trade loops.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from pumpnotifier.monitor.config import (
    POLL_INTERVAL_SECONDS,
    REQUEUE_DELAY_SECONDS,
    RETRY_DELAY_SECONDS,
    SchedulePolicy,
)

logger = logging.getLogger(__name__)

Tick = Callable[[], Awaitable[bool]]


class Scheduler:
    """
    Runs a tick coroutine forever under a scheduling policy.

    ## Policies
    - `INTERVAL`: wait `interval` seconds after every tick
    - `REQUEUE`: wait `requeue_delay` after a good tick and a fixed
      `retry_delay` after a failed one

    A tick returns `False` to report a transient failure. Unexpected
    exceptions are logged and counted as failures; they never stop the loop.
    """

    def __init__(
        self,
        name: str,
        tick: Tick,
        policy: SchedulePolicy = SchedulePolicy.INTERVAL,
        interval: float = POLL_INTERVAL_SECONDS,
        retry_delay: float = RETRY_DELAY_SECONDS,
        requeue_delay: float = REQUEUE_DELAY_SECONDS,
    ):
        self.name = name
        self.tick = tick
        self.policy = policy
        self.interval = interval
        self.retry_delay = retry_delay
        self.requeue_delay = requeue_delay

    def next_delay(self, ok: bool) -> float:
        if self.policy is SchedulePolicy.INTERVAL:
            return self.interval
        return self.requeue_delay if ok else self.retry_delay

    async def run_once(self) -> float:
        """Run one tick and return the delay before the next one."""
        try:
            ok = await self.tick()
        except Exception as e:
            logger.error(f"Error in {self.name} loop: {e}", exc_info=True)
            ok = False

        return self.next_delay(ok)

    async def run(self, max_ticks: int | None = None) -> None:
        logger.info(f"{self.name} loop started ({self.policy.value})")

        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            delay = await self.run_once()
            ticks += 1
            await asyncio.sleep(delay)
