"""
Supabase implementation of public content repositories:
sports_info rows and website feedback reports.
"""

import logging
from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import (
    FeedbackStatus, SportsInfo, WebsiteFeedback, WebsiteFeedbackCreate,
)
from core.domain.constants import FEEDBACK_DEFAULT_PRIORITY, convert_legacy_gradient
from core.interfaces.repositories import ISportsInfoRepository, IFeedbackRepository
from core.utils.season import parse_season
from infrastructure.database.supabase_client import get_client, run_sync

logger = logging.getLogger(__name__)


class SupabaseSportsInfoRepository(ISportsInfoRepository):
    """Supabase implementation of sports_info repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> SportsInfo:
        season, year = parse_season(data["name"])
        return SportsInfo(
            id=data["id"],
            name=data["name"],
            title=data.get("title"),
            description=data.get("description") or "",
            gradient=convert_legacy_gradient(data.get("gradient")),
            participants=data.get("participants") or 0,
            next_game=data.get("next_game"),
            features=data.get("features") or [],
            total_teams=data.get("total_teams") or 0,
            roster_path=data.get("roster_path"),
            coming_soon=bool(data.get("coming_soon")),
            is_active=data.get("is_active", True),
            season=season,
            year=year,
        )

    @run_sync
    def _list_active_sync(self) -> List[dict]:
        response = self.db.table("sports_info").select("*")\
            .eq("is_active", True)\
            .order("name")\
            .execute()
        return response.data or []

    async def list_active(self) -> List[SportsInfo]:
        data = await self._list_active_sync()
        return [self._to_model(row) for row in data]

    @run_sync
    def _get_by_name_sync(self, name: str) -> Optional[dict]:
        response = self.db.table("sports_info").select("*").eq("name", name).execute()
        return response.data[0] if response.data else None

    async def get_by_name(self, name: str) -> Optional[SportsInfo]:
        data = await self._get_by_name_sync(name)
        return self._to_model(data) if data else None

    @run_sync
    def _update_sync(self, name: str, data: dict) -> Optional[dict]:
        response = self.db.table("sports_info").update(data).eq("name", name).execute()
        return response.data[0] if response.data else None

    async def update(self, name: str, data: dict) -> Optional[SportsInfo]:
        row = await self._update_sync(name, data)
        return self._to_model(row) if row else None


class SupabaseFeedbackRepository(IFeedbackRepository):
    """Supabase implementation of website feedback repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> WebsiteFeedback:
        return WebsiteFeedback(
            id=data["id"],
            url=data.get("url") or "",
            user_agent=data.get("user_agent") or "",
            issue_description=data["issue_description"],
            feedback_type=data.get("feedback_type") or "other",
            status=data.get("status") or FeedbackStatus.NEW,
            priority=data.get("priority") or FEEDBACK_DEFAULT_PRIORITY,
            admin_notes=data.get("admin_notes"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            resolved_at=data.get("resolved_at"),
        )

    @run_sync
    def _create_sync(self, data: WebsiteFeedbackCreate) -> dict:
        row = data.model_dump(mode="json")
        row["status"] = FeedbackStatus.NEW.value
        row["priority"] = FEEDBACK_DEFAULT_PRIORITY
        response = self.db.table("website_feedback").insert(row).execute()
        return response.data[0]

    async def create(self, data: WebsiteFeedbackCreate) -> WebsiteFeedback:
        row = await self._create_sync(data)
        logger.info(f"[FEEDBACK_REPO] New {data.feedback_type.value} report {row['id']}")
        return self._to_model(row)

    @run_sync
    def _list_sync(self, status: Optional[FeedbackStatus]) -> List[dict]:
        query = self.db.table("website_feedback").select("*")
        if status:
            query = query.eq("status", status.value)
        response = query.order("created_at", desc=True).execute()
        return response.data or []

    async def list(self, status: Optional[FeedbackStatus] = None) -> List[WebsiteFeedback]:
        data = await self._list_sync(status)
        return [self._to_model(row) for row in data]

    @run_sync
    def _update_sync(self, feedback_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("website_feedback")\
            .update(data)\
            .eq("id", str(feedback_id))\
            .execute()
        return response.data[0] if response.data else None

    async def update(self, feedback_id: UUID, data: dict) -> Optional[WebsiteFeedback]:
        row = await self._update_sync(feedback_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, feedback_id: UUID) -> bool:
        response = self.db.table("website_feedback").delete()\
            .eq("id", str(feedback_id))\
            .execute()
        return bool(response.data)

    async def delete(self, feedback_id: UUID) -> bool:
        return await self._delete_sync(feedback_id)
