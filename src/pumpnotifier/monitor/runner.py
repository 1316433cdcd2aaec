"""
Composition root: wires the feed, state, pollers and Telegram bot together.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from aiogram import Bot, Dispatcher

from pumpnotifier.feed.client import PumpFunClient
from pumpnotifier.monitor.config import RETRY_DELAY_SECONDS, DiscoveryMode, Settings
from pumpnotifier.monitor.discovery import TokenDiscoveryPoller
from pumpnotifier.monitor.liveness import run_liveness_server
from pumpnotifier.monitor.rate import ExchangeRateCache
from pumpnotifier.monitor.scheduler import Scheduler
from pumpnotifier.monitor.state import MonitorState
from pumpnotifier.monitor.trades import TradeMonitor
from pumpnotifier.notify.commands import create_command_router
from pumpnotifier.notify.telegram import NotificationSink, TelegramNotifier

logger = logging.getLogger(__name__)


def build_pollers(
    settings: Settings,
    feed: PumpFunClient,
    state: MonitorState,
    sink: NotificationSink,
) -> tuple[TokenDiscoveryPoller, TradeMonitor]:
    trade_monitor = TradeMonitor(
        feed=feed,
        state=state,
        sink=sink,
        threshold_usd=settings.threshold_usd,
        market_cap_source=settings.market_cap_source,
        explorer_url=settings.explorer_url,
    )
    discovery = TokenDiscoveryPoller(
        feed=feed,
        state=state,
        sink=sink,
        threshold_usd=settings.threshold_usd,
        mode=settings.discovery_mode,
        trade_monitor=trade_monitor,
        explorer_url=settings.explorer_url,
    )
    return discovery, trade_monitor


def build_schedulers(
    settings: Settings,
    discovery: TokenDiscoveryPoller,
    trade_monitor: TradeMonitor,
) -> list[Scheduler]:
    common = dict(
        policy=settings.schedule_policy,
        interval=settings.poll_interval,
        retry_delay=settings.retry_delay,
        requeue_delay=settings.requeue_delay,
    )
    return [
        Scheduler("discovery", discovery.poll_once, **common),
        Scheduler("trades", trade_monitor.poll_once, **common),
    ]


async def run_monitoring(settings: Settings) -> None:
    """
    Run every background task until the process is terminated.

    ## Task Management
    One TaskGroup holds:
    - SOL price refresh loop
    - Discovery loop
    - Trade loop
    - Liveness HTTP server (guarded)
    - Telegram command polling, `/start` (guarded)
    """
    bot = Bot(token=settings.bot_token)
    dispatcher = Dispatcher()
    dispatcher.include_router(create_command_router())

    feed = PumpFunClient(
        base_url=settings.feed_base_url,
        timeout=settings.request_timeout,
        retry_delay=settings.retry_delay,
    )
    rate = ExchangeRateCache(feed)
    state = MonitorState.create(rate, dedup_capacity=settings.dedup_capacity)
    sink = TelegramNotifier(bot, settings.chat_id)

    discovery, trade_monitor = build_pollers(settings, feed, state, sink)

    logger.info(
        f"Threshold: ${settings.threshold_usd:,.2f} | "
        f"Discovery: {settings.discovery_mode.value} | "
        f"Market cap source: {settings.market_cap_source.value}"
    )
    if settings.discovery_mode is DiscoveryMode.DEFER:
        logger.info("New tokens are evaluated through the trade enrichment path")

    components = [
        ("liveness", lambda: run_liveness_server(settings.port)),
        ("telegram", lambda: dispatcher.start_polling(bot, handle_signals=False)),
    ]

    try:
        await run_core(
            rate,
            build_schedulers(settings, discovery, trade_monitor),
            rate_refresh_interval=settings.rate_refresh_interval,
            components=components,
            retry_delay=settings.retry_delay,
        )
    finally:
        await feed.close()
        await bot.session.close()


async def run_guarded(
    name: str,
    start: Callable[[], Awaitable[None]],
    retry_delay: float = RETRY_DELAY_SECONDS,
) -> None:
    """
    Run a peripheral component, restarting it after `retry_delay` on failure.

    Returns when the component exits cleanly. Errors are logged and never
    reach the TaskGroup, so the polling loops keep running.
    """
    while True:
        try:
            await start()
            logger.info(f"{name} stopped")
            return
        except Exception as e:
            logger.error(
                f"{name} failed, restarting in {retry_delay} seconds: {e}",
                exc_info=True,
            )
            await asyncio.sleep(retry_delay)


async def run_core(
    rate: ExchangeRateCache,
    schedulers: list[Scheduler],
    rate_refresh_interval: float,
    components: Sequence[tuple[str, Callable[[], Awaitable[None]]]] = (),
    retry_delay: float = RETRY_DELAY_SECONDS,
) -> None:
    """
    Prime the SOL price, then run the rate loop, the pollers and the
    guarded peripheral components in one TaskGroup.

    The first discovery tick must not run against an unknown rate: a token
    valued at $0 is marked seen and never evaluated again.
    """
    await rate.refresh()

    async with asyncio.TaskGroup() as tg:
        tg.create_task(rate.run(rate_refresh_interval, refresh_first=False))
        for scheduler in schedulers:
            tg.create_task(scheduler.run())
        for name, start in components:
            tg.create_task(run_guarded(name, start, retry_delay))
