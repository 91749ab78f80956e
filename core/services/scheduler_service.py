"""
Periodic scheduler - keeps derived league content fresh.
Runs as an asyncio background task alongside the API server and bot.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from core.services.announcement_service import AnnouncementService
from core.services.content_service import ContentService
from core.services.league_service import LeagueService
from core.utils.season import sport_for_name

logger = logging.getLogger(__name__)


class SchedulerService:
    """Refreshes sports_info.next_game and retires expired announcements."""

    def __init__(self, league_service: LeagueService, content_service: ContentService,
                 announcement_service: AnnouncementService, interval_seconds: int = 3600):
        self.league_service = league_service
        self.content_service = content_service
        self.announcement_service = announcement_service
        self.interval_seconds = interval_seconds
        self._running = False
        self._tick_count = 0
        self._tick_lock = asyncio.Lock()

    async def run(self):
        """Main scheduler loop."""
        self._running = True
        logger.info(f"[SCHEDULER] Started, ticking every {self.interval_seconds}s")

        while self._running:
            await self.run_once()
            await asyncio.sleep(self.interval_seconds)

    async def run_once(self, now: Optional[datetime] = None) -> bool:
        """One guarded tick. Returns False when skipped or failed."""
        if self._tick_lock.locked():
            logger.warning("[SCHEDULER] Previous tick still running, skipping")
            return False
        try:
            async with self._tick_lock:
                await self._tick(now)
            return True
        except Exception as e:
            logger.error(f"[SCHEDULER] Tick failed: {e}", exc_info=True)
            return False

    async def stop(self):
        self._running = False

    async def _tick(self, now: Optional[datetime] = None):
        self._tick_count += 1
        now = now or datetime.now(timezone.utc)

        await self._refresh_next_games(now)

        expired = await self.announcement_service.deactivate_expired(now)
        if expired:
            logger.info(f"[SCHEDULER] Deactivated {expired} expired announcements")

    async def _refresh_next_games(self, now: datetime):
        """Point each sport's next_game at its earliest upcoming scheduled game."""
        sports = await self.content_service.list_active_uncached()
        for info in sports:
            sport = sport_for_name(info.name)
            if not sport:
                continue

            next_game = await self.league_service.next_game_date(sport, now)
            if next_game == info.next_game:
                continue

            await self.content_service.set_next_game(info.name, next_game)
            logger.info(f"[SCHEDULER] {info.name}: next_game {info.next_game} -> {next_game}")
