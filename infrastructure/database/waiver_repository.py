"""
Supabase implementation of Waiver repository.
"""

import logging
from datetime import date
from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import WaiverType, WaiverSignature
from core.interfaces.repositories import IWaiverRepository
from infrastructure.database.supabase_client import get_client, run_sync

logger = logging.getLogger(__name__)


class SupabaseWaiverRepository(IWaiverRepository):
    """Supabase implementation of waiver signature repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> WaiverSignature:
        return WaiverSignature(
            id=data["id"],
            waiver_type=data["waiver_type"],
            waiver_version=data.get("waiver_version") or "1.0",
            participant_name=data["participant_name"],
            participant_dob=data["participant_dob"],
            digital_signature=data["digital_signature"],
            acknowledge_terms=bool(data.get("acknowledge_terms")),
            voluntary_signature=bool(data.get("voluntary_signature")),
            legal_age_certification=bool(data.get("legal_age_certification")),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            signature_timestamp=data.get("signature_timestamp"),
        )

    @run_sync
    def _find_existing_sync(self, participant_name: str, participant_dob: date,
                            waiver_type: WaiverType) -> Optional[dict]:
        response = self.db.table("waiver_signatures").select("*")\
            .eq("participant_name", participant_name)\
            .eq("participant_dob", participant_dob.isoformat())\
            .eq("waiver_type", waiver_type.value)\
            .limit(1)\
            .execute()
        return response.data[0] if response.data else None

    async def find_existing(self, participant_name: str, participant_dob: date,
                            waiver_type: WaiverType) -> Optional[WaiverSignature]:
        data = await self._find_existing_sync(participant_name, participant_dob, waiver_type)
        return self._to_model(data) if data else None

    @run_sync
    def _get_by_id_sync(self, waiver_id: UUID) -> Optional[dict]:
        response = self.db.table("waiver_signatures").select("*")\
            .eq("id", str(waiver_id))\
            .execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, waiver_id: UUID) -> Optional[WaiverSignature]:
        data = await self._get_by_id_sync(waiver_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, data: dict) -> dict:
        response = self.db.table("waiver_signatures").insert(data).execute()
        return response.data[0]

    async def create(self, data: dict) -> WaiverSignature:
        row = await self._create_sync(data)
        logger.info(f"[WAIVER_REPO] Inserted {row.get('waiver_type')} waiver {row['id']}")
        return self._to_model(row)

    @run_sync
    def _update_sync(self, waiver_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("waiver_signatures")\
            .update(data)\
            .eq("id", str(waiver_id))\
            .execute()
        return response.data[0] if response.data else None

    async def update(self, waiver_id: UUID, data: dict) -> Optional[WaiverSignature]:
        row = await self._update_sync(waiver_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _list_for_participant_sync(self, participant_name: str,
                                   participant_dob: date) -> List[dict]:
        response = self.db.table("waiver_signatures").select("*")\
            .eq("participant_name", participant_name)\
            .eq("participant_dob", participant_dob.isoformat())\
            .order("signature_timestamp", desc=True)\
            .execute()
        return response.data or []

    async def list_for_participant(self, participant_name: str,
                                   participant_dob: date) -> List[WaiverSignature]:
        data = await self._list_for_participant_sync(participant_name, participant_dob)
        return [self._to_model(row) for row in data]

    @run_sync
    def _list_sync(self, waiver_type: Optional[WaiverType]) -> List[dict]:
        query = self.db.table("waiver_signatures").select("*")
        if waiver_type:
            query = query.eq("waiver_type", waiver_type.value)
        response = query.order("signature_timestamp", desc=True).execute()
        return response.data or []

    async def list(self, waiver_type: Optional[WaiverType] = None) -> List[WaiverSignature]:
        data = await self._list_sync(waiver_type)
        return [self._to_model(row) for row in data]
