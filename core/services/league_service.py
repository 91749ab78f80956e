"""
League service - teams, rosters, locations, games and schedules.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional, List, Dict, Iterable
from uuid import UUID

from core.domain.models import (
    SportType, GameStatus,
    Team, TeamCreate, TeamUpdate, TeamRecord,
    Player, PlayerCreate, PlayerUpdate,
    Location, LocationCreate, LocationUpdate,
    Game, GameCreate, GameUpdate, GameDetail,
    Schedule, ScheduleWeek, LeagueStats,
)
from core.domain.constants import DEFAULT_SEASON, WEEK_SPAN_DAYS, convert_legacy_gradient
from core.domain.exceptions import NotFoundError, FormValidationError
from core.interfaces.repositories import (
    ITeamRepository, IPlayerRepository, ILocationRepository, IGameRepository,
)

logger = logging.getLogger(__name__)


def compute_team_record(team_id: UUID, games: Iterable[Game]) -> TeamRecord:
    """
    Win/loss record from completed games with both scores.
    Ties count as neither; percentage is over decided games only.
    """
    wins = losses = 0
    for game in games:
        if game.status != GameStatus.COMPLETED or not game.has_scores:
            continue
        if game.home_team_id == team_id:
            ours, theirs = game.home_score, game.away_score
        elif game.away_team_id == team_id:
            ours, theirs = game.away_score, game.home_score
        else:
            continue
        if ours > theirs:
            wins += 1
        elif ours < theirs:
            losses += 1

    decided = wins + losses
    return TeamRecord(
        wins=wins,
        losses=losses,
        win_percentage=round(wins / decided * 100) if decided else 0,
        total_games=decided,
    )


def compute_team_records(team_ids: Iterable[UUID], games: Iterable[Game]) -> Dict[UUID, TeamRecord]:
    """Records for many teams in one pass over the games"""
    tally: Dict[UUID, List[int]] = {team_id: [0, 0] for team_id in team_ids}
    for game in games:
        if game.status != GameStatus.COMPLETED or not game.has_scores:
            continue
        if game.home_score == game.away_score:
            continue
        winner, loser = (
            (game.home_team_id, game.away_team_id)
            if game.home_score > game.away_score
            else (game.away_team_id, game.home_team_id)
        )
        if winner in tally:
            tally[winner][0] += 1
        if loser in tally:
            tally[loser][1] += 1

    records = {}
    for team_id, (wins, losses) in tally.items():
        decided = wins + losses
        records[team_id] = TeamRecord(
            wins=wins,
            losses=losses,
            win_percentage=round(wins / decided * 100) if decided else 0,
            total_games=decided,
        )
    return records


def build_schedule(sport: SportType, details: List[GameDetail]) -> Schedule:
    """Group games by week number; each week spans its first game + 6 days"""
    by_week: Dict[int, List[GameDetail]] = {}
    for detail in details:
        by_week.setdefault(detail.game.week_number, []).append(detail)

    weeks = []
    for week_number in sorted(by_week):
        games = sorted(by_week[week_number], key=lambda d: d.game.scheduled_at)
        start = games[0].game.scheduled_at
        weeks.append(ScheduleWeek(
            week_number=week_number,
            start_date=start,
            end_date=start + timedelta(days=WEEK_SPAN_DAYS),
            games=games,
        ))

    season = details[0].game.season if details and details[0].game.season else DEFAULT_SEASON
    return Schedule(season=season, sport_type=sport, weeks=weeks, total_weeks=len(weeks))


class LeagueService:
    """Service for league data (teams, players, locations, games)"""

    def __init__(
        self,
        team_repo: ITeamRepository,
        player_repo: IPlayerRepository,
        location_repo: ILocationRepository,
        game_repo: IGameRepository,
    ):
        self.team_repo = team_repo
        self.player_repo = player_repo
        self.location_repo = location_repo
        self.game_repo = game_repo

    # === Teams ===

    async def list_teams(self, sport: Optional[SportType] = None) -> List[Team]:
        """Teams with rosters attached"""
        teams = await self.team_repo.list(sport)
        players = await self.player_repo.list(sport)

        rosters: Dict[UUID, List[Player]] = {}
        for player in players:
            if player.team_id:
                rosters.setdefault(player.team_id, []).append(player)

        return [
            team.model_copy(update={
                "players": sorted(rosters.get(team.id, []), key=lambda p: p.jersey_number),
            })
            for team in teams
        ]

    async def get_team(self, team_id: UUID) -> Optional[Team]:
        team = await self.team_repo.get_by_id(team_id)
        if not team:
            return None
        players = await self.player_repo.list_by_team(team_id)
        return team.model_copy(update={"players": players})

    async def create_team(self, data: TeamCreate) -> Team:
        data = data.model_copy(update={"gradient": convert_legacy_gradient(data.gradient)})
        team = await self.team_repo.create(data)
        logger.info(f"[LEAGUE] Team created: {team.name} ({team.sport.value})")
        return team

    async def update_team(self, team_id: UUID, data: TeamUpdate) -> Team:
        changes = data.model_dump(mode="json", exclude_unset=True)
        if "gradient" in changes:
            changes["gradient"] = convert_legacy_gradient(changes["gradient"])
        team = await self.team_repo.update(team_id, changes)
        if not team:
            raise NotFoundError("Team", str(team_id))
        return team

    async def delete_team(self, team_id: UUID) -> bool:
        """Removes the roster first so the team row can go"""
        removed = await self.player_repo.delete_by_team(team_id)
        deleted = await self.team_repo.delete(team_id)
        logger.info(f"[LEAGUE] Team {team_id} deleted={deleted}, players removed={removed}")
        return deleted

    # === Players ===

    async def list_players(self, sport: Optional[SportType] = None) -> List[Player]:
        return await self.player_repo.list(sport)

    async def get_player(self, player_id: UUID) -> Optional[Player]:
        return await self.player_repo.get_by_id(player_id)

    async def list_team_players(self, team_id: UUID) -> List[Player]:
        return await self.player_repo.list_by_team(team_id)

    async def create_player(self, data: PlayerCreate) -> Player:
        team = await self.team_repo.get_by_id(data.team_id)
        if not team:
            raise NotFoundError("Team", str(data.team_id))
        return await self.player_repo.create(data)

    async def update_player(self, player_id: UUID, data: PlayerUpdate) -> Player:
        player = await self.player_repo.update(player_id, data.model_dump(mode="json", exclude_unset=True))
        if not player:
            raise NotFoundError("Player", str(player_id))
        return player

    async def delete_player(self, player_id: UUID) -> bool:
        return await self.player_repo.delete(player_id)

    # === Locations ===

    async def list_locations(self) -> List[Location]:
        return await self.location_repo.list()

    async def get_location(self, location_id: UUID) -> Optional[Location]:
        return await self.location_repo.get_by_id(location_id)

    async def create_location(self, data: LocationCreate) -> Location:
        return await self.location_repo.create(data)

    async def update_location(self, location_id: UUID, data: LocationUpdate) -> Location:
        location = await self.location_repo.update(
            location_id, data.model_dump(mode="json", exclude_unset=True)
        )
        if not location:
            raise NotFoundError("Location", str(location_id))
        return location

    async def delete_location(self, location_id: UUID) -> bool:
        return await self.location_repo.delete(location_id)

    # === Games ===

    async def resolve_games(self, games: List[Game]) -> List[GameDetail]:
        """Attach teams and location; games missing any of them are skipped"""
        if not games:
            return []
        teams = {t.id: t for t in await self.team_repo.list()}
        locations = {loc.id: loc for loc in await self.location_repo.list()}

        details = []
        for game in games:
            home = teams.get(game.home_team_id)
            away = teams.get(game.away_team_id)
            location = locations.get(game.location_id) if game.location_id else None
            if not (home and away and location):
                logger.warning(f"[LEAGUE] Skipping game {game.id} with incomplete data")
                continue
            details.append(GameDetail(game=game, home_team=home, away_team=away, location=location))
        return details

    async def list_games(self, sport: Optional[SportType] = None,
                         team_id: Optional[UUID] = None,
                         status: Optional[GameStatus] = None) -> List[GameDetail]:
        games = await self.game_repo.list(sport=sport, team_id=team_id, status=status)
        return await self.resolve_games(games)

    async def get_game(self, game_id: UUID) -> Optional[GameDetail]:
        game = await self.game_repo.get_by_id(game_id)
        if not game:
            return None
        details = await self.resolve_games([game])
        return details[0] if details else None

    async def get_upcoming_games(self, sport: Optional[SportType] = None,
                                 limit: Optional[int] = None,
                                 now: Optional[datetime] = None) -> List[GameDetail]:
        now = now or datetime.now(timezone.utc)
        games = await self.game_repo.get_upcoming(now, sport=sport, limit=limit)
        return await self.resolve_games(games)

    async def next_game_date(self, sport: SportType, now: Optional[datetime] = None) -> Optional[date]:
        """Day of the earliest scheduled game still ahead, if any"""
        now = now or datetime.now(timezone.utc)
        upcoming = await self.game_repo.get_upcoming(now, sport=sport, limit=1)
        return upcoming[0].scheduled_at.date() if upcoming else None

    async def create_game(self, data: GameCreate) -> Game:
        if data.home_team_id == data.away_team_id:
            raise FormValidationError({"away_team_id": "A team cannot play itself"})
        return await self.game_repo.create(data)

    async def update_game(self, game_id: UUID, data: GameUpdate) -> Game:
        changes = data.model_dump(mode="json", exclude_unset=True)
        changes["updated_at"] = datetime.now(timezone.utc).isoformat()
        game = await self.game_repo.update(game_id, changes)
        if not game:
            raise NotFoundError("Game", str(game_id))
        return game

    async def delete_game(self, game_id: UUID) -> bool:
        return await self.game_repo.delete(game_id)

    # === Schedule & records ===

    async def get_schedule(self, sport: SportType) -> Schedule:
        details = await self.list_games(sport=sport)
        return build_schedule(sport, details)

    async def get_team_record(self, team_id: UUID) -> TeamRecord:
        games = await self.game_repo.list(team_id=team_id, status=GameStatus.COMPLETED)
        return compute_team_record(team_id, games)

    async def get_team_records(self, team_ids: List[UUID],
                               sport: Optional[SportType] = None) -> Dict[UUID, TeamRecord]:
        games = await self.game_repo.list(sport=sport, status=GameStatus.COMPLETED)
        return compute_team_records(team_ids, games)

    async def get_stats(self, now: Optional[datetime] = None) -> LeagueStats:
        now = now or datetime.now(timezone.utc)
        teams = await self.team_repo.list()
        players = await self.player_repo.list()
        games = await self.game_repo.list()
        locations = await self.location_repo.list()
        upcoming = await self.game_repo.get_upcoming(now)
        return LeagueStats(
            total_teams=len(teams),
            total_players=len(players),
            total_games=len(games),
            total_locations=len(locations),
            upcoming_games=len(upcoming),
            completed_games=sum(1 for g in games if g.status == GameStatus.COMPLETED),
        )
