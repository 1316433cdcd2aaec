"""
Main entry point for the pump.fun notifier.

Polls pump.fun for new tokens and trades and sends a Telegram message once
per token when its market cap clears the configured USD threshold.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv
from pumpnotifier.exceptions import ConfigError
from pumpnotifier.monitor.config import Settings
from pumpnotifier.monitor.logging_config import setup_logging
from pumpnotifier.monitor.runner import run_monitoring

# Load environment variables
load_dotenv()

logger = logging.getLogger("pumpnotifier")


async def main(settings: Settings) -> None:
    """
    Run the notifier until interrupted.

    ## Environment Variables
    - `TELEGRAM_BOT_API_KEY`: Bot token (required)
    - `CHAT_ID`: Destination chat (required)
    - `PORT`: Liveness port (default: 3000)

    See `pumpnotifier.monitor.config.ENV_MAP` for the tuning knobs.
    """
    logger.info("=== pump.fun Notifier Starting ===")

    try:
        await run_monitoring(settings)
    except* Exception as e:
        logger.error(f"Fatal error in main loop: {e}", exc_info=True)
        raise
    finally:
        logger.info("=== pump.fun Notifier Stopped ===")


if __name__ == "__main__":
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        setup_logging().error(f"Error: {e}")
        sys.exit(1)

    setup_logging(settings.log_file)

    try:
        asyncio.run(main(settings))
    except KeyboardInterrupt:
        logger.info("✅ Shutdown completed gracefully")
