"""
Tests for the polling scheduler.
"""

from pumpnotifier.monitor.config import SchedulePolicy
from pumpnotifier.monitor.discovery import TokenDiscoveryPoller
from pumpnotifier.monitor.scheduler import Scheduler

from tests.helpers import DOWN, token_payload


async def _ok() -> bool:
    return True


async def _failed() -> bool:
    return False


async def test_interval_policy_waits_full_interval_either_way():
    scheduler = Scheduler("t", _ok, SchedulePolicy.INTERVAL, interval=60, retry_delay=5)
    assert await scheduler.run_once() == 60

    scheduler.tick = _failed
    assert await scheduler.run_once() == 60


async def test_requeue_policy_backs_off_only_on_failure():
    scheduler = Scheduler(
        "t", _ok, SchedulePolicy.REQUEUE, interval=60, retry_delay=5, requeue_delay=0
    )
    assert await scheduler.run_once() == 0

    scheduler.tick = _failed
    assert await scheduler.run_once() == 5


async def test_unexpected_exception_counts_as_failure():
    async def explode() -> bool:
        raise RuntimeError("boom")

    scheduler = Scheduler("t", explode, SchedulePolicy.REQUEUE, retry_delay=5, requeue_delay=1)

    assert await scheduler.run_once() == 5


async def test_loop_survives_failures_and_resumes(feed, state, sink, upstream, set_rate):
    await set_rate(0.02)
    poller = TokenDiscoveryPoller(feed=feed, state=state, sink=sink, threshold_usd=10_000)
    calls = []

    async def tick() -> bool:
        calls.append(len(calls))
        if len(calls) > 3:
            upstream.latest_token = token_payload("MintA", market_cap=500_000)
        return await poller.poll_once()

    upstream.latest_token = DOWN
    scheduler = Scheduler(
        "discovery", tick, SchedulePolicy.REQUEUE, retry_delay=0, requeue_delay=0
    )
    await scheduler.run(max_ticks=6)

    assert len(calls) == 6
    assert len(sink.sent) == 1
