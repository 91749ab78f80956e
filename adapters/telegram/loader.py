"""
Telegram bot loader - initializes bot, dispatcher, and services.
"""

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.enums import ParseMode

from config.settings import settings
from adapters.loader import build_services
from adapters.telegram.messenger import TelegramSender


# === BOT INITIALIZATION ===
bot = Bot(
    token=settings.telegram_bot_token,
    default=DefaultBotProperties(parse_mode=ParseMode.HTML),
)
storage = MemoryStorage()
dp = Dispatcher(storage=storage)


# === BUSINESS SERVICES ===
services = build_services()
services.notifications.add_sender(TelegramSender(bot))

# handlers receive it as the `services` argument
dp["services"] = services
