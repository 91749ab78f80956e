#!/usr/bin/env python3
"""
Seed locations, teams (with rosters) and sports info from a JSON file.

Run with: python3 scripts/seed_database.py scripts/data/seed_example.json [--clear]

--clear deletes existing games, players, teams and locations first.
Sports info rows are upserted by name.
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from pydantic import ValidationError

from core.domain.models import TeamCreate, PlayerCreate, LocationCreate
from core.services import LeagueService
from infrastructure.database import (
    SupabaseTeamRepository,
    SupabasePlayerRepository,
    SupabaseLocationRepository,
    SupabaseGameRepository,
)
from infrastructure.database.supabase_client import check_credentials, get_client, run_sync

# children first
CLEAR_ORDER = ["score_changes", "games", "players", "teams", "locations"]


@run_sync
def _clear_table(table: str) -> int:
    # PostgREST refuses unfiltered deletes
    response = get_client().table(table).delete().neq(
        "id", "00000000-0000-0000-0000-000000000000"
    ).execute()
    return len(response.data or [])


@run_sync
def _upsert_sports_info(rows: list) -> int:
    response = get_client().table("sports_info").upsert(rows, on_conflict="name").execute()
    return len(response.data or [])


async def seed(path: Path, clear: bool):
    data = json.loads(path.read_text(encoding="utf-8"))

    league = LeagueService(
        team_repo=SupabaseTeamRepository(),
        player_repo=SupabasePlayerRepository(),
        location_repo=SupabaseLocationRepository(),
        game_repo=SupabaseGameRepository(),
    )

    if clear:
        for table in CLEAR_ORDER:
            count = await _clear_table(table)
            print(f"  cleared {table}: {count} rows")

    for raw in data.get("locations", []):
        location = await league.create_location(LocationCreate(**raw))
        print(f"  location: {location.name}")

    players_created = 0
    for raw in data.get("teams", []):
        roster = raw.pop("players", [])
        team = await league.create_team(TeamCreate(**raw))
        for player in roster:
            try:
                await league.create_player(PlayerCreate(
                    **player, team_id=team.id, sport_type=team.sport,
                ))
                players_created += 1
            except ValidationError as e:
                print(f"    SKIP player {player.get('name')}: {e.errors()[0]['msg']}")
        print(f"  team: {team.name} ({len(roster)} players)")

    sports = data.get("sports_info", [])
    if sports:
        count = await _upsert_sports_info(sports)
        print(f"  sports info: {count} rows")

    print(f"\nDone: {len(data.get('teams', []))} teams, {players_created} players")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed league data from JSON")
    parser.add_argument("file", type=Path, help="seed JSON file")
    parser.add_argument("--clear", action="store_true", help="delete existing rows first")
    args = parser.parse_args()

    if not args.file.exists():
        parser.error(f"{args.file} not found")

    check_credentials()
    asyncio.run(seed(args.file, args.clear))
