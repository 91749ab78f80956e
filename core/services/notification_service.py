"""
Notification service - push token registry and announcement fan-out.
"""

import asyncio
import logging
from typing import Optional, List, Dict

from core.domain.models import (
    AnnouncementPriority, TargetAudience, DevicePlatform,
    PushToken, PushTokenCreate, PushMessage, NotificationResult,
)
from core.domain.constants import ANNOUNCEMENT_TITLE_PREFIX
from core.domain.exceptions import FormValidationError
from core.interfaces.repositories import IPushTokenRepository
from core.interfaces.messaging import INotificationSender

logger = logging.getLogger(__name__)


class NotificationService:
    """Routes push messages to the sender registered for each platform"""

    def __init__(self, push_token_repo: IPushTokenRepository,
                 senders: Optional[List[INotificationSender]] = None):
        self.push_token_repo = push_token_repo
        self._senders: Dict[DevicePlatform, INotificationSender] = {}
        for sender in senders or []:
            self.add_sender(sender)

    def add_sender(self, sender: INotificationSender) -> None:
        for platform in sender.platforms:
            self._senders[platform] = sender

    # === Token registry ===

    async def register_token(self, user_id: str, data: PushTokenCreate) -> PushToken:
        """
        Same device with the same token is just reactivated;
        anything else replaces the row for (user_id, device_id).
        """
        existing = await self.push_token_repo.find_by_device(user_id, data.device_id)
        if existing and existing.push_token == data.push_token:
            token = await self.push_token_repo.set_active(existing.id, True)
            if token:
                logger.info(f"[PUSH] Reactivated token for user {user_id} on {data.device_id}")
                return token

        token = await self.push_token_repo.upsert({
            "user_id": user_id,
            "push_token": data.push_token,
            "platform": data.platform.value,
            "device_id": data.device_id,
            "app_version": data.app_version,
            "is_active": True,
        })
        logger.info(f"[PUSH] Registered {data.platform.value} token for user {user_id}")
        return token

    async def unregister_token(self, user_id: str, device_id: Optional[str] = None) -> int:
        count = await self.push_token_repo.deactivate(user_id, device_id)
        logger.info(f"[PUSH] Deactivated {count} token(s) for user {user_id}")
        return count

    # === Fan-out ===

    async def _deliver(self, token: PushToken, message: PushMessage) -> bool:
        sender = self._senders.get(token.platform)
        if not sender:
            logger.warning(f"[PUSH] No sender for platform {token.platform.value}")
            return False
        return await sender.send(token, message)

    async def send_to_all(self, message: PushMessage) -> NotificationResult:
        tokens = await self.push_token_repo.list_active()
        if not tokens:
            return NotificationResult(success=True, message="No push tokens found")

        results = await asyncio.gather(
            *(self._deliver(token, message) for token in tokens),
            return_exceptions=True,
        )

        sent = 0
        for token, result in zip(tokens, results):
            if isinstance(result, Exception):
                logger.error(f"[PUSH] Error sending to {token.platform.value} token {token.id}: {result}")
            elif result:
                sent += 1
        failed = len(tokens) - sent

        logger.info(f"[PUSH] Push notification results: {sent} successful, {failed} failed")
        return NotificationResult(
            success=True,
            message="Push notifications sent",
            tokens_sent=sent,
            tokens_failed=failed,
        )

    async def notify_announcement(
        self,
        title: str,
        content: str,
        priority: AnnouncementPriority = AnnouncementPriority.NORMAL,
        target_audience: TargetAudience = TargetAudience.ALL,
    ) -> NotificationResult:
        if not title or not content:
            raise FormValidationError(
                {"title": "Title and content are required"},
                message="Title and content are required",
            )

        if target_audience != TargetAudience.ALL:
            # tokens carry no audience info yet, everyone gets it
            logger.info(f"[PUSH] Target audience: {target_audience.value}")

        message = PushMessage(
            title=f"{ANNOUNCEMENT_TITLE_PREFIX}{title}",
            body=content,
            priority=priority,
            data={
                "type": "announcement",
                "priority": priority.value,
                "target_audience": target_audience.value,
            },
        )
        return await self.send_to_all(message)
