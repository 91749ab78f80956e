"""
Telegram as a push channel: announcement fan-out to subscribed chats.
"""

import logging
from typing import List

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError

from core.domain.models import DevicePlatform, PushToken, PushMessage
from core.interfaces.messaging import INotificationSender
from adapters.telegram.views import format_push

logger = logging.getLogger(__name__)


class TelegramSender(INotificationSender):
    """Telegram tokens hold the subscriber's chat id"""

    def __init__(self, bot: Bot):
        self.bot = bot

    @property
    def platforms(self) -> List[DevicePlatform]:
        return [DevicePlatform.TELEGRAM]

    async def send(self, token: PushToken, message: PushMessage) -> bool:
        try:
            chat_id = int(token.push_token)
        except ValueError:
            logger.warning(f"[PUSH] Bad telegram chat id in token {token.id}")
            return False

        try:
            await self.bot.send_message(chat_id, format_push(message))
            return True
        except TelegramAPIError as e:
            logger.warning(f"[PUSH] Telegram delivery to {chat_id} failed: {e}")
            return False
