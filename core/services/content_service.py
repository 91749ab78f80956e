"""
Content service - sports info pages and website feedback.
Public sports info reads go through a short in-memory TTL cache.
"""

import logging
import time
from datetime import date, datetime, timezone
from typing import Optional, List, Dict, Any, Callable
from uuid import UUID

from core.domain.models import (
    FeedbackStatus, SportsInfo, SportsInfoUpdate,
    WebsiteFeedback, WebsiteFeedbackCreate,
)
from core.domain.constants import convert_legacy_gradient
from core.domain.exceptions import NotFoundError
from core.interfaces.repositories import ISportsInfoRepository, IFeedbackRepository

logger = logging.getLogger(__name__)


class TTLCache:
    """Tiny key -> value cache with per-entry expiry"""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl_seconds
        self._clock = clock
        self._data: Dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._data.get(key)
        if not entry:
            return None
        stored_at, value = entry
        if self._clock() - stored_at > self.ttl:
            del self._data[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._data[key] = (self._clock(), value)

    def clear(self) -> None:
        self._data.clear()


class ContentService:
    """Service for public content and site feedback"""

    def __init__(
        self,
        sports_info_repo: ISportsInfoRepository,
        feedback_repo: IFeedbackRepository,
        cache_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.sports_info_repo = sports_info_repo
        self.feedback_repo = feedback_repo
        self.cache = TTLCache(cache_seconds, clock)

    # === Sports info ===

    async def list_sports(self) -> List[SportsInfo]:
        cached = self.cache.get("sports:all")
        if cached is not None:
            return cached
        sports = await self.sports_info_repo.list_active()
        self.cache.set("sports:all", sports)
        return sports

    async def list_active_uncached(self) -> List[SportsInfo]:
        """Active sports straight from the database, for background jobs"""
        return await self.sports_info_repo.list_active()

    async def get_sport(self, name: str) -> Optional[SportsInfo]:
        key = f"sports:{name}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        sport = await self.sports_info_repo.get_by_name(name)
        if sport and sport.is_active:
            self.cache.set(key, sport)
            return sport
        return None

    async def update_sport(self, name: str, data: SportsInfoUpdate) -> SportsInfo:
        changes = data.model_dump(mode="json", exclude_unset=True)
        if "gradient" in changes:
            changes["gradient"] = convert_legacy_gradient(changes["gradient"])
        sport = await self.sports_info_repo.update(name, changes)
        if not sport:
            raise NotFoundError("Sport", name)
        self.cache.clear()
        logger.info(f"[CONTENT] Updated sports info '{name}': {sorted(changes)}")
        return sport

    async def set_next_game(self, name: str, next_game: Optional[date]) -> Optional[SportsInfo]:
        sport = await self.sports_info_repo.update(
            name, {"next_game": next_game.isoformat() if next_game else None}
        )
        self.cache.clear()
        return sport

    def invalidate_cache(self) -> None:
        self.cache.clear()

    # === Website feedback ===

    async def submit_feedback(self, data: WebsiteFeedbackCreate) -> WebsiteFeedback:
        return await self.feedback_repo.create(data)

    async def list_feedback(self, status: Optional[FeedbackStatus] = None) -> List[WebsiteFeedback]:
        return await self.feedback_repo.list(status)

    async def _set_status(self, feedback_id: UUID, data: dict) -> WebsiteFeedback:
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        feedback = await self.feedback_repo.update(feedback_id, data)
        if not feedback:
            raise NotFoundError("Feedback", str(feedback_id))
        return feedback

    async def mark_in_progress(self, feedback_id: UUID) -> WebsiteFeedback:
        return await self._set_status(feedback_id, {"status": FeedbackStatus.IN_PROGRESS.value})

    async def resolve_feedback(self, feedback_id: UUID,
                               admin_notes: Optional[str] = None) -> WebsiteFeedback:
        data = {
            "status": FeedbackStatus.RESOLVED.value,
            "resolved_at": datetime.now(timezone.utc).isoformat(),
        }
        if admin_notes is not None:
            data["admin_notes"] = admin_notes
        return await self._set_status(feedback_id, data)

    async def dismiss_feedback(self, feedback_id: UUID,
                               admin_notes: Optional[str] = None) -> WebsiteFeedback:
        data: Dict[str, Any] = {"status": FeedbackStatus.DISMISSED.value}
        if admin_notes is not None:
            data["admin_notes"] = admin_notes
        return await self._set_status(feedback_id, data)

    async def delete_feedback(self, feedback_id: UUID) -> bool:
        return await self.feedback_repo.delete(feedback_id)

    async def feedback_counts(self) -> Dict[str, int]:
        """Number of reports per status"""
        counts = {status.value: 0 for status in FeedbackStatus}
        for feedback in await self.feedback_repo.list():
            counts[feedback.status.value] += 1
        return counts
