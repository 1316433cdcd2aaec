"""
Trade monitor: notifies once per discovered token when its trade-time
market cap clears the threshold.
"""

import logging

from pumpnotifier.exceptions import FeedContractError, FeedError
from pumpnotifier.feed.client import PumpFunClient
from pumpnotifier.models import TradeInfo
from pumpnotifier.monitor.config import (
    EXPLORER_URL,
    MARKET_CAP_THRESHOLD_USD,
    MarketCapSource,
)
from pumpnotifier.monitor.formatting import build_trade_notification, format_market_cap
from pumpnotifier.monitor.state import MonitorState
from pumpnotifier.monitor.valuation import clears_threshold, market_cap_usd
from pumpnotifier.notify.telegram import NotificationSink

logger = logging.getLogger(__name__)


class TradeMonitor:
    def __init__(
        self,
        feed: PumpFunClient,
        state: MonitorState,
        sink: NotificationSink,
        threshold_usd: float = MARKET_CAP_THRESHOLD_USD,
        market_cap_source: MarketCapSource = MarketCapSource.REPORTED,
        explorer_url: str = EXPLORER_URL,
    ):
        self.feed = feed
        self.state = state
        self.sink = sink
        self.threshold_usd = threshold_usd
        self.market_cap_source = market_cap_source
        self.explorer_url = explorer_url

    async def poll_once(self) -> bool:
        """
        Run one trade polling cycle.

        ## Returns
        - `False` if the trade feed could not be reached (caller may back off)
        - `True` otherwise, including when the payload violated the data
          contract and the cycle was abandoned

        ## Error Handling
        Never raises feed errors. Each is logged and the cycle ends.
        """
        try:
            trades = await self.feed.latest_trades()
        except FeedContractError as e:
            logger.error(f"Unexpected trade feed payload, skipping cycle: {e}")
            return True
        except FeedError as e:
            logger.error(f"Error fetching trade data: {e}")
            return False

        for trade in trades:
            await self.handle_trade(trade)
        return True

    async def handle_trade(self, trade: TradeInfo) -> bool:
        """Evaluate a trade if its token was discovered and not yet notified."""
        mint = trade.mint

        if not self.state.seen.contains(mint):
            return False
        if self.state.notified.contains(mint):
            return False

        return await self.evaluate(mint, trade)

    async def evaluate(self, mint: str, trade: TradeInfo | None = None) -> bool:
        """
        Enrichment path: mark, fetch detail, value, notify.

        ## Parameters
        - `mint`: Token to evaluate
        - `trade`: Triggering trade, or `None` when called from discovery

        ## Returns
        - `True` if a notification was delivered

        ## Design Notes
        The mint is marked in the notified set before the detail request.
        A failed request or delivery does not unmark it, so the opportunity
        is spent and the token is never notified twice.
        """
        if not self.state.notified.add_if_new(mint):
            return False

        try:
            token = await self.feed.token_detail(mint)
        except FeedError as e:
            logger.error(f"Error fetching token details for {mint}: {e}")
            return False

        value_usd = market_cap_usd(
            token, self.state.rate.current(), self.market_cap_source, trade
        )

        if not clears_threshold(value_usd, self.threshold_usd):
            logger.info(
                f"Traded token {token.label} below threshold: {format_market_cap(value_usd)}"
            )
            return False

        notification = build_trade_notification(
            token, value_usd, self.explorer_url, trade
        )
        return await self.sink.send(notification)
