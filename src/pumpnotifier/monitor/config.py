"""
Configuration for the pump.fun notifier.

Values come from the environment (a `.env` file is loaded by `main.py`).
"""

import os
from enum import Enum

from pydantic import BaseModel, Field, ValidationError

from pumpnotifier.exceptions import ConfigError
from pumpnotifier.feed.client import DEFAULT_BASE_URL

# Defaults
DEFAULT_PORT = 3000
POLL_INTERVAL_SECONDS = 60
RATE_REFRESH_SECONDS = 60 * 60
MARKET_CAP_THRESHOLD_USD = 10_000
RETRY_DELAY_SECONDS = 5
REQUEUE_DELAY_SECONDS = 1
REQUEST_TIMEOUT_SECONDS = 10
EXPLORER_URL = "https://pump.fun/coin/{mint}"
LOG_FILE = "pumpnotifier.log"


class DiscoveryMode(str, Enum):
    DIRECT = "direct"  # Value the discovered record immediately
    DEFER = "defer"  # Hand the mint to the trade monitor enrichment path


class MarketCapSource(str, Enum):
    REPORTED = "reported"  # Token's reported SOL market cap x rate
    TRADE = "trade"  # Trade SOL amount x rate


class SchedulePolicy(str, Enum):
    INTERVAL = "interval"
    REQUEUE = "requeue"


# Environment variable -> Settings field
ENV_MAP = {
    "TELEGRAM_BOT_API_KEY": "bot_token",
    "CHAT_ID": "chat_id",
    "PORT": "port",
    "FEED_BASE_URL": "feed_base_url",
    "POLL_INTERVAL_SECONDS": "poll_interval",
    "RATE_REFRESH_SECONDS": "rate_refresh_interval",
    "MARKET_CAP_THRESHOLD_USD": "threshold_usd",
    "DISCOVERY_MODE": "discovery_mode",
    "MARKET_CAP_SOURCE": "market_cap_source",
    "SCHEDULE_POLICY": "schedule_policy",
    "RETRY_DELAY_SECONDS": "retry_delay",
    "REQUEUE_DELAY_SECONDS": "requeue_delay",
    "REQUEST_TIMEOUT_SECONDS": "request_timeout",
    "DEDUP_CAPACITY": "dedup_capacity",
    "EXPLORER_URL": "explorer_url",
    "LOG_FILE": "log_file",
}


class Settings(BaseModel):
    bot_token: str = Field(..., min_length=1)
    chat_id: str | None = None
    port: int = Field(DEFAULT_PORT, ge=0, le=65535)
    feed_base_url: str = DEFAULT_BASE_URL
    poll_interval: float = Field(POLL_INTERVAL_SECONDS, gt=0)
    rate_refresh_interval: float = Field(RATE_REFRESH_SECONDS, gt=0)
    threshold_usd: float = Field(MARKET_CAP_THRESHOLD_USD, gt=0)
    discovery_mode: DiscoveryMode = DiscoveryMode.DIRECT
    market_cap_source: MarketCapSource = MarketCapSource.REPORTED
    schedule_policy: SchedulePolicy = SchedulePolicy.INTERVAL
    retry_delay: float = Field(RETRY_DELAY_SECONDS, ge=0)
    requeue_delay: float = Field(REQUEUE_DELAY_SECONDS, ge=0)
    request_timeout: float = Field(REQUEST_TIMEOUT_SECONDS, gt=0)
    dedup_capacity: int = Field(0, ge=0)
    explorer_url: str = EXPLORER_URL
    log_file: str = LOG_FILE

    @classmethod
    def from_env(cls, environ=None, require_chat_id: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        ## Parameters
        - `environ`: Mapping to read from (default: `os.environ`)
        - `require_chat_id`: The chat-id helper bot runs without `CHAT_ID`

        ## Raises
        - `ConfigError` if the bot token is missing or any value is invalid
        """
        environ = os.environ if environ is None else environ

        if not environ.get("TELEGRAM_BOT_API_KEY"):
            raise ConfigError("TELEGRAM_BOT_API_KEY is not set")
        if require_chat_id and not environ.get("CHAT_ID"):
            raise ConfigError("CHAT_ID is not set")

        values = {
            field: environ[key]
            for key, field in ENV_MAP.items()
            if environ.get(key, "") != ""
        }

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
