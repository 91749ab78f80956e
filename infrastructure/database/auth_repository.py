"""
Resolves Supabase access tokens to users and their admin flag.
"""

import logging
from typing import Optional

from supabase import Client

from core.domain.models import AdminUser
from core.interfaces.repositories import IAuthRepository
from infrastructure.database.supabase_client import get_client, run_sync

logger = logging.getLogger(__name__)


class SupabaseAuthRepository(IAuthRepository):
    """Looks up the token owner via Supabase auth, then user_profiles.is_admin"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    @run_sync
    def _get_user_sync(self, access_token: str) -> Optional[dict]:
        response = self.db.auth.get_user(access_token)
        user = response.user if response else None
        if not user:
            return None

        profile = self.db.table("user_profiles").select("is_admin")\
            .eq("id", str(user.id))\
            .execute()
        is_admin = bool(profile.data and profile.data[0].get("is_admin"))
        return {"id": user.id, "email": user.email, "is_admin": is_admin}

    async def get_user(self, access_token: str) -> Optional[AdminUser]:
        try:
            data = await self._get_user_sync(access_token)
        except Exception as e:
            # gotrue raises on expired/invalid tokens
            logger.warning(f"[AUTH] Token rejected: {e}")
            return None
        return AdminUser(**data) if data else None
