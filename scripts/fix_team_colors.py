#!/usr/bin/env python3
"""
Normalize stored team gradients to the current palette.
Legacy values: teal -> green, purple -> pink. Unknown values -> blue.

Run with: python3 scripts/fix_team_colors.py [--dry-run]
"""

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.domain.constants import convert_legacy_gradient
from infrastructure.database.supabase_client import check_credentials, get_client, run_sync


@run_sync
def _load_teams():
    return get_client().table("teams").select("id, name, gradient").execute().data or []


@run_sync
def _set_gradient(team_id: str, gradient: str):
    get_client().table("teams").update({"gradient": gradient}).eq("id", team_id).execute()


def plan_changes(rows: list) -> list:
    """[(row, new_gradient)] for rows whose gradient is not in the palette"""
    changes = []
    for row in rows:
        current = row.get("gradient") or ""
        target = convert_legacy_gradient(current)
        if target != current:
            changes.append((row, target))
    return changes


async def fix_colors(dry_run: bool):
    rows = await _load_teams()
    changes = plan_changes(rows)
    print(f"Found {len(rows)} teams, {len(changes)} need a new color")

    for row, target in changes:
        print(f"  {row['name']}: {row.get('gradient') or '(empty)'} -> {target}")
        if not dry_run:
            await _set_gradient(row["id"], target)

    if dry_run:
        print("\nDry run: nothing was written")
    else:
        print(f"\nDone: updated {len(changes)} teams")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Normalize legacy team colors")
    parser.add_argument("--dry-run", action="store_true", help="show changes without writing")
    args = parser.parse_args()

    check_credentials()
    asyncio.run(fix_colors(args.dry_run))
