"""
Score service - live score updates and game status transitions.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID

from core.domain.models import GameStatus, ScoreSide, Game, GameDetail, ScoreChange
from core.domain.exceptions import NotFoundError
from core.interfaces.repositories import IGameRepository
from core.services.league_service import LeagueService

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ScoreService:
    """Service for live scoring"""

    def __init__(self, game_repo: IGameRepository, league_service: LeagueService):
        self.game_repo = game_repo
        self.league_service = league_service

    async def _require_game(self, game_id: UUID) -> Game:
        game = await self.game_repo.get_by_id(game_id)
        if not game:
            raise NotFoundError("Game", str(game_id))
        return game

    async def _write_scores(self, game: Game, home: int, away: int,
                            admin_user_id: Optional[UUID]) -> Game:
        updated = await self.game_repo.update(game.id, {
            "home_score": home,
            "away_score": away,
            "updated_at": _now(),
        })
        if not updated:
            raise NotFoundError("Game", str(game.id))

        if admin_user_id:
            await self.game_repo.record_score_change(ScoreChange(
                game_id=game.id,
                admin_user_id=admin_user_id,
                home_score=home,
                away_score=away,
                previous_home_score=game.home_score,
                previous_away_score=game.away_score,
            ))

        logger.info(f"[SCORES] Game {game.id}: {home}-{away}")
        return updated

    async def update_score(self, game_id: UUID, home_score: int, away_score: int,
                           admin_user_id: Optional[UUID] = None) -> Game:
        game = await self._require_game(game_id)
        return await self._write_scores(game, home_score, away_score, admin_user_id)

    async def increment_score(self, game_id: UUID, side: ScoreSide, amount: int = 1,
                              admin_user_id: Optional[UUID] = None) -> Game:
        game = await self._require_game(game_id)
        home = game.home_score or 0
        away = game.away_score or 0
        if side == ScoreSide.HOME:
            home += amount
        else:
            away += amount
        return await self._write_scores(game, home, away, admin_user_id)

    async def decrement_score(self, game_id: UUID, side: ScoreSide, amount: int = 1,
                              admin_user_id: Optional[UUID] = None) -> Game:
        # no floor at zero
        return await self.increment_score(game_id, side, -amount, admin_user_id)

    async def start_game(self, game_id: UUID) -> Game:
        game = await self._require_game(game_id)
        updated = await self.game_repo.update(game_id, {
            "status": GameStatus.IN_PROGRESS.value,
            "home_score": game.home_score if game.home_score is not None else 0,
            "away_score": game.away_score if game.away_score is not None else 0,
            "updated_at": _now(),
        })
        logger.info(f"[SCORES] Game {game_id} started")
        return updated

    async def complete_game(self, game_id: UUID) -> Game:
        await self._require_game(game_id)
        updated = await self.game_repo.update(game_id, {
            "status": GameStatus.COMPLETED.value,
            "updated_at": _now(),
        })
        logger.info(f"[SCORES] Game {game_id} completed")
        return updated

    async def get_live_games(self) -> List[GameDetail]:
        return await self.league_service.list_games(status=GameStatus.IN_PROGRESS)

    async def get_score_history(self, game_id: UUID) -> List[ScoreChange]:
        return await self.game_repo.get_score_changes(game_id)
