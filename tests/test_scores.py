"""Tests for core/services/score_service.py"""

from uuid import uuid4

import pytest

from core.domain.exceptions import NotFoundError
from core.domain.models import GameStatus, ScoreSide


class TestScoreUpdates:

    async def test_set_score_without_admin_skips_audit(self, services, db, league_data):
        game = await services.scores.update_score(league_data.week2.id, 3, 1)
        assert (game.home_score, game.away_score) == (3, 1)
        assert db.rows("score_changes") == []

    async def test_set_score_records_audit_row(self, services, league_data):
        admin_id = uuid4()
        await services.scores.update_score(league_data.week1.id, 8, 3, admin_user_id=admin_id)

        history = await services.scores.get_score_history(league_data.week1.id)
        assert len(history) == 1
        change = history[0]
        assert change.admin_user_id == admin_id
        assert (change.home_score, change.away_score) == (8, 3)
        assert (change.previous_home_score, change.previous_away_score) == (7, 3)

    async def test_increment_treats_missing_score_as_zero(self, services, league_data):
        game = await services.scores.increment_score(league_data.week2.id, ScoreSide.AWAY)
        assert (game.home_score, game.away_score) == (0, 1)

        game = await services.scores.increment_score(league_data.week2.id, ScoreSide.HOME, amount=3)
        assert (game.home_score, game.away_score) == (3, 1)

    async def test_decrement_can_go_below_zero(self, services, league_data):
        game = await services.scores.decrement_score(league_data.week2.id, ScoreSide.HOME)
        assert game.home_score == -1

    async def test_unknown_game(self, services):
        with pytest.raises(NotFoundError):
            await services.scores.update_score(uuid4(), 1, 0)
        with pytest.raises(NotFoundError):
            await services.scores.start_game(uuid4())


class TestGameStatus:

    async def test_start_sets_live_and_zeroes_scores(self, services, league_data):
        game = await services.scores.start_game(league_data.week2.id)
        assert game.status == GameStatus.IN_PROGRESS
        assert (game.home_score, game.away_score) == (0, 0)

    async def test_start_keeps_existing_scores(self, services, league_data):
        await services.scores.update_score(league_data.week2.id, 2, 2)
        game = await services.scores.start_game(league_data.week2.id)
        assert (game.home_score, game.away_score) == (2, 2)

    async def test_live_games_and_completion(self, services, league_data):
        assert await services.scores.get_live_games() == []

        await services.scores.start_game(league_data.week2.id)
        live = await services.scores.get_live_games()
        assert [d.game.id for d in live] == [league_data.week2.id]
        assert live[0].home_team.name == "Glitter Bombers"

        game = await services.scores.complete_game(league_data.week2.id)
        assert game.status == GameStatus.COMPLETED
        assert await services.scores.get_live_games() == []
