"""
Middleware for Telegram bot.

- ThrottlingMiddleware: rate limiting
"""

import time
import logging
from typing import Any, Awaitable, Callable, Dict
from collections import defaultdict

from aiogram import BaseMiddleware
from aiogram.types import Message, CallbackQuery, TelegramObject

from core.domain.constants import (
    RATE_LIMIT_COMMANDS,
    RATE_LIMIT_SUBMISSIONS,
    RATE_LIMIT_INTERVAL_SECONDS,
)
from locales import t

logger = logging.getLogger(__name__)


class ThrottlingMiddleware(BaseMiddleware):
    """
    Simple rate limiter: tracks request timestamps per user.
    Drops requests that exceed the limit within the interval.
    Form submissions get a stricter limit.
    """

    def __init__(
        self,
        default_limit: int = RATE_LIMIT_COMMANDS,
        interval: int = RATE_LIMIT_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_limit = default_limit
        self.interval = interval
        self._clock = clock
        # {user_id: [timestamp, timestamp, ...]}
        self._requests: Dict[int, list] = defaultdict(list)
        # Submitting callbacks with stricter limits
        self._strict_callbacks = {
            "reg:agree_to_email_updates:yes": RATE_LIMIT_SUBMISSIONS,
            "reg:agree_to_email_updates:no": RATE_LIMIT_SUBMISSIONS,
            "reg_submit": RATE_LIMIT_SUBMISSIONS,
            "sub:agreements:yes": RATE_LIMIT_SUBMISSIONS,
            "waiver_ack": RATE_LIMIT_SUBMISSIONS,
        }

    def _get_limit(self, event: TelegramObject) -> int:
        if isinstance(event, CallbackQuery) and event.data:
            return self._strict_callbacks.get(event.data, self.default_limit)
        return self.default_limit

    def _cleanup(self, user_id: int, now: float):
        """Remove expired timestamps."""
        cutoff = now - self.interval
        self._requests[user_id] = [
            ts for ts in self._requests[user_id] if ts > cutoff
        ]

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user = None
        if isinstance(event, (Message, CallbackQuery)):
            user = event.from_user

        if not user:
            return await handler(event, data)

        user_id = user.id
        now = self._clock()
        self._cleanup(user_id, now)

        limit = self._get_limit(event)
        if len(self._requests[user_id]) >= limit:
            logger.warning(f"Rate limit hit for user {user_id} (limit={limit})")
            if isinstance(event, Message):
                await event.answer(t("throttled"))
            elif isinstance(event, CallbackQuery):
                await event.answer(t("throttled_short"), show_alert=False)
            return  # Drop the request

        self._requests[user_id].append(now)
        return await handler(event, data)
