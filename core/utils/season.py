"""
Helpers for league names like "Summer 2025 Kickball".
"""

from datetime import date
from typing import Optional, Tuple

from core.domain.constants import SEASON_NAMES, MIN_SEASON_YEAR, MAX_SEASON_YEAR
from core.domain.models import SportType


def parse_season(name: str, today: Optional[date] = None) -> Tuple[str, int]:
    """
    Season and year from "<Season> <Year> <Sport>".
    Falls back to Spring and the current year for parts that don't parse.
    """
    season = "Spring"
    year = (today or date.today()).year

    parts = (name or "").split()
    if len(parts) >= 3:
        if parts[0] in SEASON_NAMES:
            season = parts[0]
        if parts[1].isdigit() and MIN_SEASON_YEAR <= int(parts[1]) <= MAX_SEASON_YEAR:
            year = int(parts[1])
    return season, year


def sport_for_name(name: str) -> Optional[SportType]:
    """Which sport a sports_info row is about"""
    lowered = (name or "").lower()
    for sport in SportType:
        if sport.value in lowered:
            return sport
    return None
