"""
Telegram delivery for notifications.
"""

import logging
from html import escape
from typing import Protocol

from aiogram import Bot
from aiogram.enums import ParseMode

from pumpnotifier.models import Notification

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    async def send(self, notification: Notification) -> bool: ...


def render_html(notification: Notification) -> str:
    """Append the link hint, if any, as an HTML anchor."""
    if not notification.link_url:
        return notification.text

    label = escape(notification.link_label or notification.link_url)
    href = escape(notification.link_url, quote=True)
    return f'{notification.text}\n\n<a href="{href}">{label}</a>'


class TelegramNotifier:
    """
    Sends notifications to a single chat.

    ## Error Handling
    Delivery errors are logged and reported as `False`. They never propagate
    to the pollers, and the caller does not retry.
    """

    def __init__(self, bot: Bot, chat_id: str):
        self.bot = bot
        self.chat_id = chat_id

    async def send(self, notification: Notification) -> bool:
        try:
            await self.bot.send_message(
                chat_id=self.chat_id,
                text=render_html(notification),
                parse_mode=ParseMode.HTML,
            )
        except Exception as e:
            logger.error(f"Failed to send Telegram notification: {e}")
            return False

        logger.info(f"Notification sent: {notification.text}")
        return True
