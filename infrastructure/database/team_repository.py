"""
Supabase implementation of Team and Player repositories.
"""

import logging
from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import SportType, Team, TeamCreate, Player, PlayerCreate
from core.domain.constants import convert_legacy_gradient
from core.interfaces.repositories import ITeamRepository, IPlayerRepository
from infrastructure.database.supabase_client import get_client, run_sync

logger = logging.getLogger(__name__)


class SupabaseTeamRepository(ITeamRepository):
    """Supabase implementation of team repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> Team:
        """Convert database row to Team model"""
        return Team(
            id=data["id"],
            name=data["name"],
            sport=data.get("sport") or data.get("sport_type"),
            gradient=convert_legacy_gradient(data.get("gradient")),
            description=data.get("description") or "",
            motto=data.get("motto") or "",
            founded=data.get("founded") or 2020,
            wins=data.get("wins") or 0,
            losses=data.get("losses") or 0,
            captain_id=data.get("captain_id"),
        )

    @run_sync
    def _list_sync(self, sport: Optional[SportType]) -> List[dict]:
        query = self.db.table("teams").select("*")
        if sport:
            query = query.eq("sport", sport.value)
        response = query.order("name").execute()
        return response.data or []

    async def list(self, sport: Optional[SportType] = None) -> List[Team]:
        data = await self._list_sync(sport)
        return [self._to_model(row) for row in data]

    @run_sync
    def _get_by_id_sync(self, team_id: UUID) -> Optional[dict]:
        response = self.db.table("teams").select("*").eq("id", str(team_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, team_id: UUID) -> Optional[Team]:
        data = await self._get_by_id_sync(team_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, team_data: TeamCreate) -> dict:
        data = {
            "name": team_data.name,
            "sport": team_data.sport.value,
            "gradient": convert_legacy_gradient(team_data.gradient),
            "description": team_data.description,
            "motto": team_data.motto,
            "founded": team_data.founded,
            "wins": 0,
            "losses": 0,
        }
        response = self.db.table("teams").insert(data).execute()
        return response.data[0]

    async def create(self, team_data: TeamCreate) -> Team:
        data = await self._create_sync(team_data)
        logger.info(f"[TEAM_REPO] Created team {data['id']} ({team_data.name})")
        return self._to_model(data)

    @run_sync
    def _update_sync(self, team_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("teams").update(data).eq("id", str(team_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, team_id: UUID, data: dict) -> Optional[Team]:
        row = await self._update_sync(team_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, team_id: UUID) -> bool:
        response = self.db.table("teams").delete().eq("id", str(team_id)).execute()
        return bool(response.data)

    async def delete(self, team_id: UUID) -> bool:
        return await self._delete_sync(team_id)


class SupabasePlayerRepository(IPlayerRepository):
    """Supabase implementation of player repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> Player:
        return Player(
            id=data["id"],
            name=data["name"],
            jersey_number=data.get("jersey_number") or 0,
            quote=data.get("quote") or "",
            photo_url=data.get("photo_url"),
            team_id=data.get("team_id"),
            sport_type=data["sport_type"],
        )

    @run_sync
    def _list_sync(self, sport: Optional[SportType]) -> List[dict]:
        query = self.db.table("players").select("*")
        if sport:
            query = query.eq("sport_type", sport.value)
        response = query.order("jersey_number").execute()
        return response.data or []

    async def list(self, sport: Optional[SportType] = None) -> List[Player]:
        data = await self._list_sync(sport)
        return [self._to_model(row) for row in data]

    @run_sync
    def _get_by_id_sync(self, player_id: UUID) -> Optional[dict]:
        response = self.db.table("players").select("*").eq("id", str(player_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, player_id: UUID) -> Optional[Player]:
        data = await self._get_by_id_sync(player_id)
        return self._to_model(data) if data else None

    @run_sync
    def _list_by_team_sync(self, team_id: UUID) -> List[dict]:
        response = self.db.table("players").select("*")\
            .eq("team_id", str(team_id))\
            .order("jersey_number")\
            .execute()
        return response.data or []

    async def list_by_team(self, team_id: UUID) -> List[Player]:
        data = await self._list_by_team_sync(team_id)
        return [self._to_model(row) for row in data]

    @run_sync
    def _create_sync(self, player_data: PlayerCreate) -> dict:
        data = {
            "name": player_data.name,
            "jersey_number": player_data.jersey_number,
            "quote": player_data.quote,
            "team_id": str(player_data.team_id),
            "sport_type": player_data.sport_type.value,
        }
        response = self.db.table("players").insert(data).execute()
        return response.data[0]

    async def create(self, player_data: PlayerCreate) -> Player:
        data = await self._create_sync(player_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, player_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("players").update(data).eq("id", str(player_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, player_id: UUID, data: dict) -> Optional[Player]:
        row = await self._update_sync(player_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, player_id: UUID) -> bool:
        response = self.db.table("players").delete().eq("id", str(player_id)).execute()
        return bool(response.data)

    async def delete(self, player_id: UUID) -> bool:
        return await self._delete_sync(player_id)

    @run_sync
    def _delete_by_team_sync(self, team_id: UUID) -> int:
        response = self.db.table("players").delete().eq("team_id", str(team_id)).execute()
        return len(response.data or [])

    async def delete_by_team(self, team_id: UUID) -> int:
        count = await self._delete_by_team_sync(team_id)
        logger.info(f"[PLAYER_REPO] Removed {count} players from team {team_id}")
        return count
