"""
Supabase implementation of Registration repository.
Player sign-ups live in player_registrations, the sub pool in substitute_registrations.
"""

from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import (
    SportType, RegistrationStatus, PlayerRegistration, SubstituteRegistration,
)
from core.interfaces.repositories import IRegistrationRepository
from infrastructure.database.supabase_client import get_client, run_sync


class SupabaseRegistrationRepository(IRegistrationRepository):
    """Supabase implementation of registration repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_player_model(self, data: dict) -> PlayerRegistration:
        return PlayerRegistration(
            id=data["id"],
            sport_type=data["sport_type"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=data["email"],
            phone=data.get("phone") or "",
            shirt_size=data.get("shirt_size") or "M",
            emergency_contact_name=data.get("emergency_contact_name") or "",
            emergency_contact_phone=data.get("emergency_contact_phone") or "",
            experience_level=data.get("experience_level") or "beginner",
            how_did_you_hear=data.get("how_did_you_hear") or "",
            dietary_restrictions=data.get("dietary_restrictions"),
            medical_conditions=data.get("medical_conditions"),
            agree_to_terms=bool(data.get("agree_to_terms")),
            agree_to_email_updates=bool(data.get("agree_to_email_updates")),
            status=data.get("status") or RegistrationStatus.PENDING,
            notes=data.get("notes"),
            registration_date=data.get("registration_date"),
        )

    def _to_substitute_model(self, data: dict) -> SubstituteRegistration:
        return SubstituteRegistration(
            id=data["id"],
            sport_type=data["sport_type"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            preferred_pronouns=data.get("preferred_pronouns") or "",
            age=data.get("age") or 18,
            phone=data.get("phone") or "",
            emergency_contact_name=data.get("emergency_contact_name") or "",
            emergency_contact_phone=data.get("emergency_contact_phone") or "",
            notes=data.get("notes"),
            agree_to_terms=bool(data.get("agree_to_terms")),
            agree_to_text_updates=bool(data.get("agree_to_text_updates")),
            registration_date=data.get("registration_date"),
        )

    # === Players ===

    @run_sync
    def _create_player_sync(self, data: dict) -> dict:
        response = self.db.table("player_registrations").insert(data).execute()
        return response.data[0]

    async def create_player_registration(self, data: dict) -> PlayerRegistration:
        row = await self._create_player_sync(data)
        return self._to_player_model(row)

    @run_sync
    def _list_players_sync(self, sport: Optional[SportType],
                           status: Optional[RegistrationStatus]) -> List[dict]:
        query = self.db.table("player_registrations").select("*")
        if sport:
            query = query.eq("sport_type", sport.value)
        if status:
            query = query.eq("status", status.value)
        response = query.order("registration_date", desc=True).execute()
        return response.data or []

    async def list_player_registrations(
        self,
        sport: Optional[SportType] = None,
        status: Optional[RegistrationStatus] = None,
    ) -> List[PlayerRegistration]:
        data = await self._list_players_sync(sport, status)
        return [self._to_player_model(row) for row in data]

    @run_sync
    def _update_player_sync(self, registration_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("player_registrations")\
            .update(data)\
            .eq("id", str(registration_id))\
            .execute()
        return response.data[0] if response.data else None

    async def update_player_registration(self, registration_id: UUID,
                                         data: dict) -> Optional[PlayerRegistration]:
        row = await self._update_player_sync(registration_id, data)
        return self._to_player_model(row) if row else None

    # === Substitutes ===

    @run_sync
    def _create_substitute_sync(self, data: dict) -> dict:
        response = self.db.table("substitute_registrations").insert(data).execute()
        return response.data[0]

    async def create_substitute_registration(self, data: dict) -> SubstituteRegistration:
        row = await self._create_substitute_sync(data)
        return self._to_substitute_model(row)

    @run_sync
    def _list_substitutes_sync(self, sport: Optional[SportType]) -> List[dict]:
        query = self.db.table("substitute_registrations").select("*")
        if sport:
            query = query.eq("sport_type", sport.value)
        response = query.order("registration_date", desc=True).execute()
        return response.data or []

    async def list_substitute_registrations(
        self, sport: Optional[SportType] = None
    ) -> List[SubstituteRegistration]:
        data = await self._list_substitutes_sync(sport)
        return [self._to_substitute_model(row) for row in data]
