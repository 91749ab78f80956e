"""
Supabase implementation of Announcement repository.
"""

import logging
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import Announcement, AnnouncementCreate
from core.interfaces.repositories import IAnnouncementRepository
from infrastructure.database.supabase_client import get_client, run_sync

logger = logging.getLogger(__name__)


def _parse_ts(value) -> Optional[datetime]:
    if not value or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


class SupabaseAnnouncementRepository(IAnnouncementRepository):
    """Supabase implementation of announcement repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> Announcement:
        return Announcement(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            priority=data.get("priority") or "normal",
            type=data.get("type") or "general",
            target_audience=data.get("target_audience") or "all",
            is_active=data.get("is_active", True),
            expires_at=data.get("expires_at"),
            created_by=data.get("created_by"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    @run_sync
    def _list_active_sync(self, audiences: List[str]) -> List[dict]:
        response = self.db.table("announcements").select("*")\
            .eq("is_active", True)\
            .in_("target_audience", audiences)\
            .order("created_at", desc=True)\
            .execute()
        return response.data or []

    async def list_active(self, now: datetime, audiences: List[str]) -> List[Announcement]:
        data = await self._list_active_sync(audiences)
        # expiry compared here so naive and aware timestamps both work
        result = []
        for row in data:
            expires_at = _parse_ts(row.get("expires_at"))
            if expires_at and expires_at.timestamp() <= now.timestamp():
                continue
            result.append(self._to_model(row))
        return result

    @run_sync
    def _list_all_sync(self) -> List[dict]:
        response = self.db.table("announcements").select("*")\
            .order("created_at", desc=True)\
            .execute()
        return response.data or []

    async def list_all(self) -> List[Announcement]:
        data = await self._list_all_sync()
        return [self._to_model(row) for row in data]

    @run_sync
    def _get_by_id_sync(self, announcement_id: UUID) -> Optional[dict]:
        response = self.db.table("announcements").select("*")\
            .eq("id", str(announcement_id))\
            .execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, announcement_id: UUID) -> Optional[Announcement]:
        data = await self._get_by_id_sync(announcement_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, data: AnnouncementCreate, created_by: Optional[UUID]) -> dict:
        row = data.model_dump(mode="json")
        row["is_active"] = True
        row["created_by"] = str(created_by) if created_by else None
        response = self.db.table("announcements").insert(row).execute()
        return response.data[0]

    async def create(self, data: AnnouncementCreate,
                     created_by: Optional[UUID] = None) -> Announcement:
        row = await self._create_sync(data, created_by)
        return self._to_model(row)

    @run_sync
    def _update_sync(self, announcement_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("announcements")\
            .update(data)\
            .eq("id", str(announcement_id))\
            .execute()
        return response.data[0] if response.data else None

    async def update(self, announcement_id: UUID, data: dict) -> Optional[Announcement]:
        row = await self._update_sync(announcement_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, announcement_id: UUID) -> bool:
        response = self.db.table("announcements").delete()\
            .eq("id", str(announcement_id))\
            .execute()
        return bool(response.data)

    async def delete(self, announcement_id: UUID) -> bool:
        return await self._delete_sync(announcement_id)

    @run_sync
    def _deactivate_expired_sync(self, now: datetime) -> int:
        response = self.db.table("announcements")\
            .update({"is_active": False})\
            .eq("is_active", True)\
            .lt("expires_at", now.isoformat())\
            .execute()
        return len(response.data or [])

    async def deactivate_expired(self, now: datetime) -> int:
        count = await self._deactivate_expired_sync(now)
        if count:
            logger.info(f"[ANNOUNCEMENT_REPO] Deactivated {count} expired announcements")
        return count
