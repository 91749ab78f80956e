#!/usr/bin/env python3
"""
Set a sport's next game date by hand.
The scheduler keeps next_game in sync with the games table; use this when
the schedule isn't loaded yet or the date needs an override.

Run with: python3 scripts/fix_next_game_date.py "Summer 2025 Kickball" 2025-07-12
          python3 scripts/fix_next_game_date.py "Summer 2025 Kickball" --clear
"""

import argparse
import asyncio
import os
import sys
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.services import ContentService
from infrastructure.database import SupabaseSportsInfoRepository, SupabaseFeedbackRepository
from infrastructure.database.supabase_client import check_credentials


async def fix_next_game(name: str, next_game):
    content = ContentService(
        sports_info_repo=SupabaseSportsInfoRepository(),
        feedback_repo=SupabaseFeedbackRepository(),
    )
    sport = await content.get_sport(name)
    if not sport:
        print(f"ERROR: sports_info row '{name}' not found")
        sys.exit(1)

    print(f"{name}: next_game {sport.next_game} -> {next_game}")
    await content.set_next_game(name, next_game)
    print("Done")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Set next_game for a sport")
    parser.add_argument("name", help='sports_info name, e.g. "Summer 2025 Kickball"')
    parser.add_argument("date", nargs="?", type=date.fromisoformat, help="YYYY-MM-DD")
    parser.add_argument("--clear", action="store_true", help="unset next_game")
    args = parser.parse_args()

    if not args.date and not args.clear:
        parser.error("give a date or --clear")

    check_credentials()
    asyncio.run(fix_next_game(args.name, None if args.clear else args.date))
