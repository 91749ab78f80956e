"""
Firebase Cloud Messaging sender for ios/android/web tokens.
"""

import logging
from typing import Optional, List

import httpx

from core.domain.models import AnnouncementPriority, DevicePlatform, PushToken, PushMessage
from core.domain.constants import URGENT_SOUND, DEFAULT_SOUND
from core.interfaces.messaging import INotificationSender

logger = logging.getLogger(__name__)


def build_fcm_payload(message: PushMessage, push_token: str) -> dict:
    """FCM legacy HTTP payload for one device"""
    urgent = message.priority == AnnouncementPriority.URGENT
    high = message.priority in (AnnouncementPriority.HIGH, AnnouncementPriority.URGENT)
    return {
        "to": push_token,
        "notification": {
            "title": message.title,
            "body": message.body,
        },
        "data": message.data,
        "android": {
            "priority": "high" if high else "normal",
            "notification": {
                "icon": "ic_notification",
                "color": "#1976d2",
                "sound": URGENT_SOUND if urgent else DEFAULT_SOUND,
            },
        },
        "apns": {
            "payload": {
                "aps": {
                    "sound": f"{URGENT_SOUND}.wav" if urgent else DEFAULT_SOUND,
                    "badge": 1,
                    "content-available": 1,
                },
            },
        },
    }


class FCMSender(INotificationSender):
    """Sends push notifications through the FCM HTTP endpoint"""

    def __init__(self, server_key: str, endpoint: str,
                 client: Optional[httpx.AsyncClient] = None, timeout: float = 10):
        self.server_key = server_key
        self.endpoint = endpoint
        self._client = client
        self.timeout = timeout

    @property
    def platforms(self) -> List[DevicePlatform]:
        return [DevicePlatform.IOS, DevicePlatform.ANDROID, DevicePlatform.WEB]

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        return await client.post(
            self.endpoint,
            json=payload,
            headers={"Authorization": f"key={self.server_key}"},
        )

    async def send(self, token: PushToken, message: PushMessage) -> bool:
        if not self.server_key:
            logger.warning("[FCM] Server key not configured, skipping send")
            return False

        payload = build_fcm_payload(message, token.push_token)
        try:
            if self._client:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, payload)
        except httpx.HTTPError as e:
            logger.error(f"[FCM] Error sending to token {token.push_token[:12]}...: {e}")
            return False

        if response.status_code >= 400:
            logger.error(f"[FCM] {response.status_code} for token {token.push_token[:12]}...: {response.text}")
            return False
        return True
