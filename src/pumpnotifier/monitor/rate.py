"""
SOL/USD exchange rate cache, refreshed on its own slow timer.
"""

import asyncio
import logging
import math

from pumpnotifier.exceptions import FeedError
from pumpnotifier.feed.client import PumpFunClient

logger = logging.getLogger(__name__)


class ExchangeRateCache:
    """
    Holds the last good SOL/USD rate.

    `current()` is 0 until the first successful refresh. Callers treat 0 as
    unknown: every market cap valued against it is 0, so nothing notifies.
    """

    def __init__(self, feed: PumpFunClient):
        self.feed = feed
        self._rate = 0.0

    def current(self) -> float:
        return self._rate

    async def refresh(self) -> bool:
        """
        Fetch the rate and replace the cached value.

        ## Returns
        - `True` if the cache was updated
        - `False` on failure; the previous value stays in place
        """
        try:
            price = await self.feed.sol_price()
        except FeedError as e:
            logger.error(f"Failed to refresh SOL price, keeping {self._rate}: {e}")
            return False

        if not math.isfinite(price) or price <= 0:
            logger.error(f"Ignoring invalid SOL price {price}, keeping {self._rate}")
            return False

        self._rate = price
        logger.info(f"Current SOL price: {price}")
        return True

    async def run(self, interval: float, refresh_first: bool = True) -> None:
        """Refresh every `interval` seconds, forever. Skip the first refresh if already primed."""
        logger.info("Exchange rate task started")

        if not refresh_first:
            await asyncio.sleep(interval)

        while True:
            await self.refresh()
            await asyncio.sleep(interval)
