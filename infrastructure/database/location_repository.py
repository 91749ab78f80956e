"""
Supabase implementation of Location repository.
"""

from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import Location, LocationCreate
from core.interfaces.repositories import ILocationRepository
from infrastructure.database.supabase_client import get_client, run_sync


class SupabaseLocationRepository(ILocationRepository):
    """Supabase implementation of location repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> Location:
        return Location(
            id=data["id"],
            name=data["name"],
            address=data.get("address") or "",
            city=data.get("city") or "",
            state=data.get("state") or "",
            zip_code=data.get("zip_code") or "",
            latitude=data.get("latitude") or 0.0,
            longitude=data.get("longitude") or 0.0,
            facilities=data.get("facilities") or [],
            field_type=data.get("field_type") or "grass",
            capacity=data.get("capacity"),
            parking=bool(data.get("parking")),
            restrooms=bool(data.get("restrooms")),
            water_fountains=bool(data.get("water_fountains")),
            concessions=bool(data.get("concessions")),
        )

    @run_sync
    def _list_sync(self) -> List[dict]:
        response = self.db.table("locations").select("*").order("name").execute()
        return response.data or []

    async def list(self) -> List[Location]:
        data = await self._list_sync()
        return [self._to_model(row) for row in data]

    @run_sync
    def _get_by_id_sync(self, location_id: UUID) -> Optional[dict]:
        response = self.db.table("locations").select("*").eq("id", str(location_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, location_id: UUID) -> Optional[Location]:
        data = await self._get_by_id_sync(location_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, location_data: LocationCreate) -> dict:
        data = location_data.model_dump(mode="json")
        response = self.db.table("locations").insert(data).execute()
        return response.data[0]

    async def create(self, location_data: LocationCreate) -> Location:
        data = await self._create_sync(location_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, location_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("locations").update(data).eq("id", str(location_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, location_id: UUID, data: dict) -> Optional[Location]:
        row = await self._update_sync(location_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, location_id: UUID) -> bool:
        response = self.db.table("locations").delete().eq("id", str(location_id)).execute()
        return bool(response.data)

    async def delete(self, location_id: UUID) -> bool:
        return await self._delete_sync(location_id)
