"""
Announcement service - league news feed and admin publishing.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Tuple
from uuid import UUID

from core.domain.models import (
    AnnouncementPriority, AnnouncementType, TargetAudience,
    Announcement, AnnouncementCreate, AnnouncementUpdate, NotificationResult,
)
from core.domain.constants import ANNOUNCEMENT_PRIORITY_ORDER
from core.domain.exceptions import NotFoundError
from core.interfaces.repositories import IAnnouncementRepository
from core.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def _sort_key(announcement: Announcement):
    created = announcement.created_at.timestamp() if announcement.created_at else 0
    return (ANNOUNCEMENT_PRIORITY_ORDER.get(announcement.priority.value, 99), -created)


class AnnouncementService:
    """Service for announcements"""

    def __init__(self, announcement_repo: IAnnouncementRepository,
                 notification_service: Optional[NotificationService] = None):
        self.announcement_repo = announcement_repo
        self.notification_service = notification_service

    async def get_active(
        self,
        audience: Optional[TargetAudience] = None,
        types: Optional[List[AnnouncementType]] = None,
        priorities: Optional[List[AnnouncementPriority]] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[Announcement]:
        """Active announcements, urgent first then newest"""
        now = now or datetime.now(timezone.utc)
        audiences = [TargetAudience.ALL.value]
        if audience and audience != TargetAudience.ALL:
            audiences.append(audience.value)

        announcements = await self.announcement_repo.list_active(now, audiences)
        if types:
            announcements = [a for a in announcements if a.type in types]
        if priorities:
            announcements = [a for a in announcements if a.priority in priorities]

        announcements.sort(key=_sort_key)
        return announcements[:limit] if limit else announcements

    async def list_all(self) -> List[Announcement]:
        return await self.announcement_repo.list_all()

    async def create(
        self,
        data: AnnouncementCreate,
        created_by: Optional[UUID] = None,
        notify: bool = False,
    ) -> Tuple[Announcement, Optional[NotificationResult]]:
        """
        Publish an announcement, optionally pushing it to devices.
        Returns: (announcement, notification result or None)
        """
        announcement = await self.announcement_repo.create(data, created_by)
        logger.info(f"[ANNOUNCEMENTS] Created {announcement.id}: {announcement.title}")

        result = None
        if notify and self.notification_service:
            result = await self.notification_service.notify_announcement(
                announcement.title,
                announcement.content,
                announcement.priority,
                announcement.target_audience,
            )
        return announcement, result

    async def update(self, announcement_id: UUID, data: AnnouncementUpdate) -> Announcement:
        changes = data.model_dump(mode="json", exclude_unset=True)
        changes["updated_at"] = datetime.now(timezone.utc).isoformat()
        announcement = await self.announcement_repo.update(announcement_id, changes)
        if not announcement:
            raise NotFoundError("Announcement", str(announcement_id))
        return announcement

    async def deactivate(self, announcement_id: UUID) -> Announcement:
        return await self.update(announcement_id, AnnouncementUpdate(is_active=False))

    async def delete(self, announcement_id: UUID) -> bool:
        return await self.announcement_repo.delete(announcement_id)

    async def deactivate_expired(self, now: Optional[datetime] = None) -> int:
        return await self.announcement_repo.deactivate_expired(now or datetime.now(timezone.utc))
