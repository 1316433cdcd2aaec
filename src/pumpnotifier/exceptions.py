"""
Exception hierarchy for pumpnotifier.

Only `ConfigError` is fatal. Feed errors are caught by the pollers, logged,
and retried on the next tick.
"""


class PumpNotifierError(Exception):
    """Base class for all pumpnotifier errors."""


class ConfigError(PumpNotifierError):
    """Missing or invalid configuration detected at startup."""


class FeedError(PumpNotifierError):
    """Transient upstream failure: network error, non-2xx status, timeout or bad JSON."""


class FeedContractError(FeedError):
    """Upstream answered, but the payload does not have the expected shape."""
