"""
Membership trackers used to process and notify each subject at most once.
"""

import logging
from collections import OrderedDict
from typing import Hashable

logger = logging.getLogger(__name__)


class SubjectSet:
    """
    Grow-only set of subject keys (token mints).

    ## Design Notes
    No eviction and no TTL: membership lasts for the process lifetime and is
    lost on restart. Use `BoundedSubjectSet` when memory growth matters.
    """

    def __init__(self, name: str = "subjects"):
        self.name = name
        self._keys: set[Hashable] = set()

    def contains(self, key: Hashable) -> bool:
        return key in self._keys

    def add(self, key: Hashable) -> None:
        self._keys.add(key)

    def add_if_new(self, key: Hashable) -> bool:
        """Mark `key` and return True, or return False if it was already marked."""
        if self.contains(key):
            return False
        self.add(key)
        return True

    def __contains__(self, key: Hashable) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._keys)


class BoundedSubjectSet(SubjectSet):
    """
    Fixed-capacity variant that forgets the oldest key once full.

    An evicted subject can be processed again if the feed repeats it.
    """

    def __init__(self, capacity: int, name: str = "subjects"):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        super().__init__(name)
        self.capacity = capacity
        self._ordered: OrderedDict[Hashable, None] = OrderedDict()

    def contains(self, key: Hashable) -> bool:
        return key in self._ordered

    def add(self, key: Hashable) -> None:
        if key in self._ordered:
            return
        self._ordered[key] = None
        if len(self._ordered) > self.capacity:
            evicted, _ = self._ordered.popitem(last=False)
            logger.debug(f"{self.name}: evicted {evicted}")

    def __len__(self) -> int:
        return len(self._ordered)


def make_subject_set(capacity: int, name: str) -> SubjectSet:
    """Unbounded store for capacity 0, bounded store otherwise."""
    if capacity > 0:
        return BoundedSubjectSet(capacity, name=name)
    return SubjectSet(name=name)
