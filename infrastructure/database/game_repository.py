"""
Supabase implementation of Game repository.
Covers games and the score_changes audit table.
"""

import logging
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from supabase import Client

from core.domain.models import SportType, GameStatus, Game, GameCreate, ScoreChange
from core.interfaces.repositories import IGameRepository
from infrastructure.database.supabase_client import get_client, run_sync

logger = logging.getLogger(__name__)


class SupabaseGameRepository(IGameRepository):
    """Supabase implementation of game repository"""

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_client()

    def _to_model(self, data: dict) -> Game:
        """Convert database row to Game model"""
        return Game(
            id=data["id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            location_id=data.get("location_id"),
            scheduled_at=data["scheduled_at"],
            game_time=data.get("game_time") or "",
            sport_type=data["sport_type"],
            week_number=data.get("week_number") or 1,
            season=data.get("season") or "Summer 2025",
            year=data.get("year"),
            status=data.get("status") or GameStatus.SCHEDULED,
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            updated_at=data.get("updated_at"),
        )

    def _change_to_model(self, data: dict) -> ScoreChange:
        return ScoreChange(
            id=data.get("id"),
            game_id=data["game_id"],
            admin_user_id=data.get("admin_user_id"),
            home_score=data["home_score"],
            away_score=data["away_score"],
            previous_home_score=data.get("previous_home_score"),
            previous_away_score=data.get("previous_away_score"),
            created_at=data.get("created_at"),
        )

    @run_sync
    def _list_sync(self, sport: Optional[SportType], team_id: Optional[UUID],
                   status: Optional[GameStatus]) -> List[dict]:
        query = self.db.table("games").select("*")
        if sport:
            query = query.eq("sport_type", sport.value)
        if status:
            query = query.eq("status", status.value)
        if team_id:
            query = query.or_(f"home_team_id.eq.{team_id},away_team_id.eq.{team_id}")
        response = query.order("scheduled_at").execute()
        return response.data or []

    async def list(
        self,
        sport: Optional[SportType] = None,
        team_id: Optional[UUID] = None,
        status: Optional[GameStatus] = None,
    ) -> List[Game]:
        data = await self._list_sync(sport, team_id, status)
        return [self._to_model(row) for row in data]

    @run_sync
    def _get_by_id_sync(self, game_id: UUID) -> Optional[dict]:
        response = self.db.table("games").select("*").eq("id", str(game_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, game_id: UUID) -> Optional[Game]:
        data = await self._get_by_id_sync(game_id)
        return self._to_model(data) if data else None

    @run_sync
    def _get_upcoming_sync(self, now: datetime, sport: Optional[SportType],
                           limit: Optional[int]) -> List[dict]:
        query = self.db.table("games").select("*")\
            .eq("status", GameStatus.SCHEDULED.value)\
            .gte("scheduled_at", now.isoformat())
        if sport:
            query = query.eq("sport_type", sport.value)
        query = query.order("scheduled_at")
        if limit:
            query = query.limit(limit)
        response = query.execute()
        return response.data or []

    async def get_upcoming(self, now: datetime, sport: Optional[SportType] = None,
                           limit: Optional[int] = None) -> List[Game]:
        data = await self._get_upcoming_sync(now, sport, limit)
        return [self._to_model(row) for row in data]

    @run_sync
    def _create_sync(self, game_data: GameCreate) -> dict:
        data = game_data.model_dump(mode="json")
        if data.get("year") is None:
            data["year"] = game_data.scheduled_at.year
        response = self.db.table("games").insert(data).execute()
        return response.data[0]

    async def create(self, game_data: GameCreate) -> Game:
        data = await self._create_sync(game_data)
        logger.info(f"[GAME_REPO] Created game {data['id']} for week {game_data.week_number}")
        return self._to_model(data)

    @run_sync
    def _update_sync(self, game_id: UUID, data: dict) -> Optional[dict]:
        response = self.db.table("games").update(data).eq("id", str(game_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, game_id: UUID, data: dict) -> Optional[Game]:
        row = await self._update_sync(game_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, game_id: UUID) -> bool:
        response = self.db.table("games").delete().eq("id", str(game_id)).execute()
        return bool(response.data)

    async def delete(self, game_id: UUID) -> bool:
        return await self._delete_sync(game_id)

    @run_sync
    def _record_score_change_sync(self, change: ScoreChange) -> dict:
        data = change.model_dump(mode="json", exclude={"id", "created_at"})
        response = self.db.table("score_changes").insert(data).execute()
        return response.data[0]

    async def record_score_change(self, change: ScoreChange) -> ScoreChange:
        data = await self._record_score_change_sync(change)
        return self._change_to_model(data)

    @run_sync
    def _get_score_changes_sync(self, game_id: UUID) -> List[dict]:
        response = self.db.table("score_changes").select("*")\
            .eq("game_id", str(game_id))\
            .order("created_at", desc=True)\
            .execute()
        return response.data or []

    async def get_score_changes(self, game_id: UUID) -> List[ScoreChange]:
        data = await self._get_score_changes_sync(game_id)
        return [self._change_to_model(row) for row in data]
