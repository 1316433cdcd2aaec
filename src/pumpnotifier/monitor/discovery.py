"""
Token discovery poller.
"""

import logging

from pumpnotifier.exceptions import FeedContractError, FeedError
from pumpnotifier.feed.client import PumpFunClient
from pumpnotifier.models import TokenInfo
from pumpnotifier.monitor.config import (
    EXPLORER_URL,
    MARKET_CAP_THRESHOLD_USD,
    DiscoveryMode,
)
from pumpnotifier.monitor.formatting import (
    build_new_token_notification,
    format_market_cap,
)
from pumpnotifier.monitor.state import MonitorState
from pumpnotifier.monitor.trades import TradeMonitor
from pumpnotifier.monitor.valuation import clears_threshold, market_cap_usd
from pumpnotifier.notify.telegram import NotificationSink

logger = logging.getLogger(__name__)


class TokenDiscoveryPoller:
    """
    Polls the latest-token feed and handles each mint once.

    ## Modes
    - `DiscoveryMode.DIRECT`: value the record with its reported cap and
      notify right away if it clears the threshold
    - `DiscoveryMode.DEFER`: hand the mint to `TradeMonitor.evaluate`

    A direct-mode "New Token" alert does not mark the notified set, so a
    later trade on the same mint can still produce one "Trade Alert".
    Each alert kind fires at most once per mint.
    """

    def __init__(
        self,
        feed: PumpFunClient,
        state: MonitorState,
        sink: NotificationSink,
        threshold_usd: float = MARKET_CAP_THRESHOLD_USD,
        mode: DiscoveryMode = DiscoveryMode.DIRECT,
        trade_monitor: TradeMonitor | None = None,
        explorer_url: str = EXPLORER_URL,
    ):
        if mode is DiscoveryMode.DEFER and trade_monitor is None:
            raise ValueError("DiscoveryMode.DEFER requires a trade monitor")

        self.feed = feed
        self.state = state
        self.sink = sink
        self.threshold_usd = threshold_usd
        self.mode = mode
        self.trade_monitor = trade_monitor
        self.explorer_url = explorer_url

    async def poll_once(self) -> bool:
        """Fetch one latest-token record. Returns `False` if the feed was unreachable."""
        try:
            token = await self.feed.latest_token()
        except FeedContractError as e:
            logger.error(f"Unexpected token feed payload, skipping cycle: {e}")
            return True
        except FeedError as e:
            logger.error(f"Error fetching new tokens: {e}")
            return False

        await self.handle_token(token)
        return True

    async def handle_token(self, token: TokenInfo) -> None:
        # Mark before any awaited call so a slow cycle cannot process it twice
        if not self.state.seen.add_if_new(token.mint):
            return

        logger.info(f"New token discovered: {token.label} | Mint: {token.mint}")

        if self.mode is DiscoveryMode.DEFER:
            await self.trade_monitor.evaluate(token.mint)
            return

        value_usd = market_cap_usd(token, self.state.rate.current())
        formatted = format_market_cap(value_usd)

        if not clears_threshold(value_usd, self.threshold_usd):
            logger.info(f"New token {token.label} is below threshold: {formatted}")
            return

        notification = build_new_token_notification(token, value_usd, self.explorer_url)
        await self.sink.send(notification)
