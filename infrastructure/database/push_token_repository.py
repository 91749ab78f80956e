"""
Supabase implementation of PushToken repository.
"""

from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import DevicePlatform, PushToken
from core.interfaces.repositories import IPushTokenRepository
from infrastructure.database.supabase_client import get_client, run_sync


class SupabasePushTokenRepository(IPushTokenRepository):
    """Supabase implementation of push token repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> PushToken:
        return PushToken(
            id=data["id"],
            user_id=str(data["user_id"]),
            push_token=data["push_token"],
            platform=data["platform"],
            device_id=data.get("device_id") or "unknown",
            app_version=data.get("app_version"),
            is_active=data.get("is_active", True),
        )

    @run_sync
    def _find_by_device_sync(self, user_id: str, device_id: str) -> Optional[dict]:
        response = self.db.table("push_tokens").select("*")\
            .eq("user_id", user_id)\
            .eq("device_id", device_id)\
            .execute()
        return response.data[0] if response.data else None

    async def find_by_device(self, user_id: str, device_id: str) -> Optional[PushToken]:
        data = await self._find_by_device_sync(user_id, device_id)
        return self._to_model(data) if data else None

    @run_sync
    def _set_active_sync(self, token_id: UUID, is_active: bool) -> Optional[dict]:
        response = self.db.table("push_tokens")\
            .update({"is_active": is_active})\
            .eq("id", str(token_id))\
            .execute()
        return response.data[0] if response.data else None

    async def set_active(self, token_id: UUID, is_active: bool) -> Optional[PushToken]:
        data = await self._set_active_sync(token_id, is_active)
        return self._to_model(data) if data else None

    @run_sync
    def _upsert_sync(self, data: dict) -> dict:
        response = self.db.table("push_tokens")\
            .upsert(data, on_conflict="user_id,device_id")\
            .execute()
        return response.data[0]

    async def upsert(self, data: dict) -> PushToken:
        row = await self._upsert_sync(data)
        return self._to_model(row)

    @run_sync
    def _deactivate_sync(self, user_id: str, device_id: Optional[str]) -> int:
        query = self.db.table("push_tokens")\
            .update({"is_active": False})\
            .eq("user_id", user_id)
        if device_id:
            query = query.eq("device_id", device_id)
        response = query.execute()
        return len(response.data or [])

    async def deactivate(self, user_id: str, device_id: Optional[str] = None) -> int:
        return await self._deactivate_sync(user_id, device_id)

    @run_sync
    def _list_active_sync(self, platforms: Optional[List[DevicePlatform]]) -> List[dict]:
        query = self.db.table("push_tokens").select("*").eq("is_active", True)
        if platforms:
            query = query.in_("platform", [p.value for p in platforms])
        response = query.execute()
        return response.data or []

    async def list_active(self, platforms: Optional[List[DevicePlatform]] = None) -> List[PushToken]:
        data = await self._list_active_sync(platforms)
        return [self._to_model(row) for row in data]
