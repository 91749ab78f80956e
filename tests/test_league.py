"""Tests for core/services/league_service.py"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from core.domain.constants import convert_legacy_gradient
from core.domain.exceptions import NotFoundError, FormValidationError
from core.domain.models import (
    SportType, GameStatus, Game, TeamCreate, TeamUpdate, PlayerCreate, PlayerUpdate,
    LocationUpdate, GameCreate, GameUpdate,
)
from core.services.league_service import compute_team_record, compute_team_records


def _game(home, away, status=GameStatus.COMPLETED, home_score=None, away_score=None):
    return Game(
        id=uuid4(),
        home_team_id=home,
        away_team_id=away,
        scheduled_at=datetime(2025, 7, 5, tzinfo=timezone.utc),
        sport_type=SportType.KICKBALL,
        status=status,
        home_score=home_score,
        away_score=away_score,
    )


class TestGradients:
    """Team colors from before the palette change map to supported ones"""

    def test_legacy_colors_are_converted(self):
        assert convert_legacy_gradient("teal") == "green"
        assert convert_legacy_gradient("purple") == "pink"

    def test_supported_color_kept(self):
        assert convert_legacy_gradient("Orange ") == "orange"

    def test_unknown_or_empty_falls_back_to_blue(self):
        assert convert_legacy_gradient("chartreuse") == "blue"
        assert convert_legacy_gradient("") == "blue"
        assert convert_legacy_gradient(None) == "blue"


class TestTeamRecords:

    def test_wins_losses_and_percentage(self):
        a, b, c = uuid4(), uuid4(), uuid4()
        games = [
            _game(a, b, home_score=7, away_score=3),
            _game(c, a, home_score=2, away_score=4),
            _game(a, c, home_score=1, away_score=6),
        ]
        record = compute_team_record(a, games)
        assert (record.wins, record.losses) == (2, 1)
        assert record.win_percentage == 67
        assert record.total_games == 3

    def test_ties_and_unfinished_games_ignored(self):
        a, b = uuid4(), uuid4()
        games = [
            _game(a, b, home_score=5, away_score=5),
            _game(a, b, status=GameStatus.IN_PROGRESS, home_score=9, away_score=0),
            _game(a, b, home_score=None, away_score=None),
        ]
        record = compute_team_record(a, games)
        assert record.total_games == 0
        assert record.win_percentage == 0

    def test_bulk_records_match_single(self):
        a, b, c = uuid4(), uuid4(), uuid4()
        games = [
            _game(a, b, home_score=7, away_score=3),
            _game(b, c, home_score=2, away_score=1),
            _game(c, a, home_score=0, away_score=0),
        ]
        records = compute_team_records([a, b, c], games)
        for team_id in (a, b, c):
            assert records[team_id] == compute_team_record(team_id, games)

    def test_bulk_records_include_teams_without_games(self):
        lonely = uuid4()
        records = compute_team_records([lonely], [])
        assert records[lonely].total_games == 0


class TestTeams:

    async def test_create_team_normalizes_gradient(self, services, db):
        team = await services.league.create_team(
            TeamCreate(name="Teal Terrors", sport=SportType.DODGEBALL, gradient="teal")
        )
        assert team.gradient == "green"
        assert db.rows("teams")[0]["sport"] == "dodgeball"

    async def test_list_teams_by_sport_with_rosters(self, services, league_data):
        teams = await services.league.list_teams(SportType.KICKBALL)
        assert [t.name for t in teams] == ["Glitter Bombers", "Rainbow Rockets"]

        rockets = next(t for t in teams if t.id == league_data.rockets.id)
        assert [p.jersey_number for p in rockets.players] == [7, 12]

    async def test_get_team_includes_players(self, services, league_data):
        team = await services.league.get_team(league_data.rockets.id)
        assert {p.name for p in team.players} == {"Sam Chen", "Alex Rivera"}
        assert await services.league.get_team(uuid4()) is None

    async def test_update_team(self, services, league_data):
        team = await services.league.update_team(
            league_data.bombers.id, TeamUpdate(motto="Shine on", gradient="purple")
        )
        assert team.motto == "Shine on"
        assert team.gradient == "pink"

    async def test_update_missing_team(self, services):
        with pytest.raises(NotFoundError):
            await services.league.update_team(uuid4(), TeamUpdate(motto="x"))

    async def test_delete_team_removes_roster(self, services, db, league_data):
        assert await services.league.delete_team(league_data.rockets.id) is True
        assert not any(p["team_id"] == str(league_data.rockets.id) for p in db.rows("players"))
        assert await services.league.get_team(league_data.rockets.id) is None


class TestPlayers:

    async def test_player_needs_existing_team(self, services):
        with pytest.raises(NotFoundError):
            await services.league.create_player(PlayerCreate(
                name="Nobody", team_id=uuid4(), sport_type=SportType.KICKBALL,
            ))

    async def test_update_and_delete_player(self, services, league_data):
        players = await services.league.list_team_players(league_data.rockets.id)
        player = await services.league.update_player(players[0].id, PlayerUpdate(quote="Kick it"))
        assert player.quote == "Kick it"

        assert await services.league.delete_player(player.id) is True
        assert await services.league.get_player(player.id) is None

    async def test_update_missing_player(self, services):
        with pytest.raises(NotFoundError):
            await services.league.update_player(uuid4(), PlayerUpdate(quote="x"))

    async def test_list_players_by_sport(self, services, league_data):
        assert len(await services.league.list_players(SportType.KICKBALL)) == 2
        assert await services.league.list_players(SportType.DODGEBALL) == []


class TestLocations:

    async def test_update_location(self, services, league_data):
        location = await services.league.update_location(
            league_data.park.id, LocationUpdate(parking=True, capacity=200)
        )
        assert location.parking is True
        assert location.capacity == 200

    async def test_update_missing_location(self, services):
        with pytest.raises(NotFoundError):
            await services.league.update_location(uuid4(), LocationUpdate(parking=True))


class TestGames:

    async def test_team_cannot_play_itself(self, services, league_data):
        with pytest.raises(FormValidationError) as exc:
            await services.league.create_game(GameCreate(
                home_team_id=league_data.rockets.id,
                away_team_id=league_data.rockets.id,
                location_id=league_data.park.id,
                scheduled_at=datetime(2025, 8, 1, tzinfo=timezone.utc),
                sport_type=SportType.KICKBALL,
            ))
        assert "away_team_id" in exc.value.errors

    async def test_year_defaults_to_scheduled_year(self, db, league_data):
        assert all(row["year"] == 2025 for row in db.rows("games"))

    async def test_games_resolve_teams_and_location(self, services, league_data):
        detail = await services.league.get_game(league_data.week1.id)
        assert detail.home_team.name == "Rainbow Rockets"
        assert detail.away_team.name == "Glitter Bombers"
        assert detail.location.name == "Dolores Park"

    async def test_games_with_missing_team_are_skipped(self, services, db, league_data):
        db.rows("teams")[:] = [t for t in db.rows("teams") if t["id"] != str(league_data.bombers.id)]
        assert await services.league.list_games(SportType.KICKBALL) == []
        assert await services.league.get_game(league_data.week2.id) is None

    async def test_list_games_for_team_and_status(self, services, league_data):
        games = await services.league.list_games(
            team_id=league_data.rockets.id, status=GameStatus.COMPLETED,
        )
        assert [d.game.id for d in games] == [league_data.week1.id, league_data.week1_late.id]

    async def test_upcoming_games(self, services, league_data):
        now = datetime(2025, 7, 8, tzinfo=timezone.utc)
        upcoming = await services.league.get_upcoming_games(now=now)
        assert [d.game.id for d in upcoming] == [league_data.week2.id]

        later = now + timedelta(days=30)
        assert await services.league.get_upcoming_games(now=later) == []

    async def test_next_game_date(self, services, league_data):
        now = datetime(2025, 7, 8, tzinfo=timezone.utc)
        assert await services.league.next_game_date(SportType.KICKBALL, now) == date(2025, 7, 12)
        assert await services.league.next_game_date(SportType.DODGEBALL, now) is None

    async def test_update_game_stamps_updated_at(self, services, league_data):
        game = await services.league.update_game(league_data.week2.id, GameUpdate(game_time="6:00 PM"))
        assert game.game_time == "6:00 PM"
        assert game.updated_at is not None

    async def test_update_missing_game(self, services):
        with pytest.raises(NotFoundError):
            await services.league.update_game(uuid4(), GameUpdate(game_time="noon"))


class TestSchedule:

    async def test_schedule_groups_by_week(self, services, league_data):
        schedule = await services.league.get_schedule(SportType.KICKBALL)

        assert schedule.total_weeks == 2
        assert schedule.season == "Summer 2025"
        week1, week2 = schedule.weeks
        assert week1.week_number == 1
        assert [d.game.id for d in week1.games] == [league_data.week1.id, league_data.week1_late.id]
        assert week1.end_date - week1.start_date == timedelta(days=6)
        assert [d.game.id for d in week2.games] == [league_data.week2.id]

    async def test_empty_schedule(self, services):
        schedule = await services.league.get_schedule(SportType.DODGEBALL)
        assert schedule.weeks == []
        assert schedule.total_weeks == 0


class TestStandingsAndStats:

    async def test_team_records_from_completed_games(self, services, league_data):
        records = await services.league.get_team_records(
            [league_data.rockets.id, league_data.bombers.id], SportType.KICKBALL,
        )
        rockets = records[league_data.rockets.id]
        bombers = records[league_data.bombers.id]
        assert (rockets.wins, rockets.losses, rockets.win_percentage) == (1, 0, 100)
        assert (bombers.wins, bombers.losses, bombers.win_percentage) == (0, 1, 0)

        single = await services.league.get_team_record(league_data.rockets.id)
        assert single == rockets

    async def test_stats(self, services, league_data):
        stats = await services.league.get_stats(now=datetime(2025, 7, 1, tzinfo=timezone.utc))
        assert stats.total_teams == 3
        assert stats.total_players == 2
        assert stats.total_games == 3
        assert stats.total_locations == 1
        assert stats.completed_games == 2
        assert stats.upcoming_games == 1
