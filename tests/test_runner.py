"""
Tests for wiring the pollers and running the core loops.
"""

import asyncio

import pytest

from pumpnotifier.feed.client import SOL_PRICE_PATH
from pumpnotifier.monitor.config import DiscoveryMode, SchedulePolicy, Settings
from pumpnotifier.monitor.discovery import TokenDiscoveryPoller
from pumpnotifier.monitor.runner import build_pollers, build_schedulers, run_core, run_guarded
from pumpnotifier.monitor.scheduler import Scheduler

from tests.helpers import token_payload


def _settings(**env):
    base = {"TELEGRAM_BOT_API_KEY": "123456:TEST", "CHAT_ID": "1"}
    return Settings.from_env(dict(base, **env))


async def test_build_pollers_shares_state(feed, state, sink):
    settings = _settings(DISCOVERY_MODE="defer", MARKET_CAP_THRESHOLD_USD="5000")

    discovery, trade_monitor = build_pollers(settings, feed, state, sink)

    assert discovery.mode is DiscoveryMode.DEFER
    assert discovery.trade_monitor is trade_monitor
    assert discovery.state is trade_monitor.state is state
    assert trade_monitor.threshold_usd == 5000


async def test_build_schedulers_uses_policy(feed, state, sink):
    settings = _settings(SCHEDULE_POLICY="requeue", RETRY_DELAY_SECONDS="3")
    discovery, trade_monitor = build_pollers(settings, feed, state, sink)

    schedulers = build_schedulers(settings, discovery, trade_monitor)

    assert [s.name for s in schedulers] == ["discovery", "trades"]
    assert all(s.policy is SchedulePolicy.REQUEUE for s in schedulers)
    assert schedulers[0].next_delay(ok=False) == 3


async def _run_until(coro, condition, attempts: int = 200):
    task = asyncio.create_task(coro)
    for _ in range(attempts):
        if condition():
            break
        await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


def _discovery_scheduler(feed, state, sink):
    poller = TokenDiscoveryPoller(feed=feed, state=state, sink=sink, threshold_usd=10_000)
    return Scheduler("discovery", poller.poll_once, SchedulePolicy.INTERVAL, interval=60)


async def test_first_discovery_tick_uses_primed_rate(feed, state, sink, upstream, rate):
    upstream.sol_price = {"solPrice": 0.02}
    upstream.latest_token = token_payload("MintA", market_cap=5_000_000)

    await _run_until(
        run_core(rate, [_discovery_scheduler(feed, state, sink)], rate_refresh_interval=3600),
        lambda: sink.sent,
    )

    assert rate.current() == 0.02
    assert len(sink.sent) == 1
    assert "$100.00k" in sink.sent[0].text
    assert upstream.count(SOL_PRICE_PATH) == 1


async def test_failing_component_does_not_stop_pollers(feed, state, sink, upstream, rate):
    upstream.sol_price = {"solPrice": 0.02}
    upstream.latest_token = token_payload("MintA", market_cap=5_000_000)
    attempts = []

    async def flaky_polling():
        attempts.append(1)
        if len(attempts) <= 2:
            raise ConnectionError("telegram unreachable")
        await asyncio.Event().wait()

    await _run_until(
        run_core(
            rate,
            [_discovery_scheduler(feed, state, sink)],
            rate_refresh_interval=3600,
            components=[("telegram", flaky_polling)],
            retry_delay=0,
        ),
        lambda: sink.sent and len(attempts) >= 3,
    )

    assert len(attempts) == 3
    assert len(sink.sent) == 1


async def test_run_guarded_restarts_until_clean_exit(caplog):
    attempts = []

    async def component():
        attempts.append(1)
        if len(attempts) < 3:
            raise OSError("address already in use")

    await run_guarded("liveness", component, retry_delay=0)

    assert len(attempts) == 3
    assert "address already in use" in caplog.text
