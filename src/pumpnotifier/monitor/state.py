"""
Shared state for the pollers, owned by the composition root.
"""

from pumpnotifier.monitor.dedup import SubjectSet, make_subject_set
from pumpnotifier.monitor.rate import ExchangeRateCache


class MonitorState:
    """
    Process-wide state passed explicitly to each poller task.

    - `seen`: mints already discovered
    - `notified`: mints that already received a trade notification
    - `rate`: latest SOL/USD rate
    """

    def __init__(
        self,
        rate: ExchangeRateCache,
        seen: SubjectSet | None = None,
        notified: SubjectSet | None = None,
    ):
        self.rate = rate
        self.seen = seen if seen is not None else SubjectSet(name="seen")
        self.notified = notified if notified is not None else SubjectSet(name="notified")

    @classmethod
    def create(cls, rate: ExchangeRateCache, dedup_capacity: int = 0) -> "MonitorState":
        return cls(
            rate=rate,
            seen=make_subject_set(dedup_capacity, "seen"),
            notified=make_subject_set(dedup_capacity, "notified"),
        )
