"""
Telegram command handlers.
"""

import logging

from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.types import Message

logger = logging.getLogger(__name__)

START_REPLY = "Bot is running and will notify you about new tokens and trades!"


async def handle_start(message: Message) -> None:
    await message.answer(START_REPLY)


async def handle_any_message(message: Message) -> None:
    """Reply with the chat id so it can be copied into CHAT_ID."""
    chat_id = message.chat.id
    logger.info(f"Chat ID: {chat_id}")
    await message.answer(f"Your Chat ID is: {chat_id}")


def create_command_router() -> Router:
    router = Router(name="commands")
    router.message.register(handle_start, CommandStart())
    return router


def create_chat_id_router() -> Router:
    router = Router(name="chat_id")
    router.message.register(handle_any_message)
    return router
