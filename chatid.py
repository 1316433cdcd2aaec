"""
Helper bot that replies to any message with its chat id.

Run it, message the bot from the target chat, and copy the reply into CHAT_ID.
"""

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from dotenv import load_dotenv
from pumpnotifier.exceptions import ConfigError
from pumpnotifier.monitor.config import Settings
from pumpnotifier.monitor.logging_config import setup_logging
from pumpnotifier.notify.commands import create_chat_id_router

load_dotenv()

logger = logging.getLogger("pumpnotifier")


async def main(settings: Settings) -> None:
    bot = Bot(token=settings.bot_token)
    dispatcher = Dispatcher()
    dispatcher.include_router(create_chat_id_router())

    logger.info("Bot is running...")
    try:
        await dispatcher.start_polling(bot)
    finally:
        await bot.session.close()


if __name__ == "__main__":
    try:
        settings = Settings.from_env(require_chat_id=False)
    except ConfigError as e:
        setup_logging().error(f"Error: {e}")
        sys.exit(1)

    setup_logging(settings.log_file)

    try:
        asyncio.run(main(settings))
    except KeyboardInterrupt:
        logger.info("✅ Shutdown completed gracefully")
