#!/usr/bin/env python3
"""
Find player rows that are really team names (left over from roster imports)
and optionally delete them.

Confidence:
  HIGH   - player name equals a team name (case-insensitive)
  MEDIUM - one name contains the other

Run with: python3 scripts/cleanup_duplicate_players.py [--apply] [--include-medium]
"""

import argparse
import asyncio
import os
import sys
from typing import List, Tuple

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.domain.models import Player, Team
from infrastructure.database import SupabaseTeamRepository, SupabasePlayerRepository
from infrastructure.database.supabase_client import check_credentials

HIGH = "HIGH"
MEDIUM = "MEDIUM"


def find_suspects(players: List[Player], teams: List[Team]) -> List[Tuple[Player, Team, str]]:
    """[(player, matching team, confidence)], at most one match per player"""
    suspects = []
    for player in players:
        name = player.name.strip().lower()
        if not name:
            continue
        match = None
        for team in teams:
            team_name = team.name.strip().lower()
            if name == team_name:
                match = (player, team, HIGH)
                break
            if match is None and (team_name in name or name in team_name):
                match = (player, team, MEDIUM)
        if match:
            suspects.append(match)
    return suspects


async def cleanup(apply: bool, include_medium: bool):
    team_repo = SupabaseTeamRepository()
    player_repo = SupabasePlayerRepository()

    teams = await team_repo.list()
    players = await player_repo.list()
    suspects = find_suspects(players, teams)
    print(f"Checked {len(players)} players against {len(teams)} teams: {len(suspects)} suspects")

    to_delete = []
    for player, team, confidence in suspects:
        print(f"  [{confidence}] player '{player.name}' (#{player.jersey_number}) ~ team '{team.name}'")
        if confidence == HIGH or include_medium:
            to_delete.append(player)

    if not apply:
        print(f"\nDry run: would delete {len(to_delete)} players. Re-run with --apply")
        return

    deleted = 0
    for player in to_delete:
        if await player_repo.delete(player.id):
            deleted += 1
    print(f"\nDone: deleted {deleted}/{len(to_delete)} players")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Remove players named after teams")
    parser.add_argument("--apply", action="store_true", help="actually delete")
    parser.add_argument("--include-medium", action="store_true",
                        help="also delete MEDIUM confidence matches")
    args = parser.parse_args()

    check_credentials()
    asyncio.run(cleanup(args.apply, args.include_medium))
