"""
Messaging interfaces - abstractions for push delivery.
Each sender covers one or more device platforms (FCM, Telegram, etc.)
so the fan-out logic stays the same for every channel.
"""

from abc import ABC, abstractmethod
from typing import List
from core.domain.models import DevicePlatform, PushToken, PushMessage


class INotificationSender(ABC):
    """Delivers a push message to a single device token"""

    @property
    @abstractmethod
    def platforms(self) -> List[DevicePlatform]:
        """Platforms this sender can deliver to"""
        pass

    @abstractmethod
    async def send(self, token: PushToken, message: PushMessage) -> bool:
        """Send one message. Returns False on delivery failure"""
        pass
