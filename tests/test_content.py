"""Tests for sports info content, feedback and season helpers"""

from datetime import date
from uuid import uuid4

import pytest

from core.domain.exceptions import NotFoundError
from core.domain.models import (
    SportType, FeedbackStatus, FeedbackType, SportsInfoUpdate, WebsiteFeedbackCreate,
)
from core.services.content_service import ContentService, TTLCache
from core.utils.season import parse_season, sport_for_name
from infrastructure.database import SupabaseSportsInfoRepository, SupabaseFeedbackRepository


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def content(db, clock):
    db.seed(
        "sports_info",
        {"name": "Summer 2025 Kickball", "gradient": "teal", "is_active": True, "participants": 120},
        {"name": "Fall 2025 Dodgeball", "is_active": True, "coming_soon": True},
        {"name": "Winter 2019 Bowling", "is_active": False},
    )
    return ContentService(
        sports_info_repo=SupabaseSportsInfoRepository(db),
        feedback_repo=SupabaseFeedbackRepository(db),
        cache_seconds=300,
        clock=clock,
    )


class TestSeasonNames:

    def test_parses_season_and_year(self):
        assert parse_season("Fall 2026 Dodgeball") == ("Fall", 2026)

    def test_falls_back_per_part(self):
        today = date(2025, 3, 1)
        assert parse_season("Kickball", today) == ("Spring", 2025)
        assert parse_season("Autumn 2026 Kickball", today) == ("Spring", 2026)
        assert parse_season("Summer 1999 Kickball", today) == ("Summer", 2025)

    def test_sport_for_name(self):
        assert sport_for_name("Summer 2025 Kickball") == SportType.KICKBALL
        assert sport_for_name("fall dodgeball league") == SportType.DODGEBALL
        assert sport_for_name("Bowling") is None


class TestTTLCache:

    def test_expires_after_ttl(self, clock):
        cache = TTLCache(10, clock)
        cache.set("k", "v")
        clock.now += 10
        assert cache.get("k") == "v"
        clock.now += 1
        assert cache.get("k") is None


class TestSportsInfo:

    async def test_active_sports_with_derived_fields(self, content):
        sports = await content.list_sports()
        assert [s.name for s in sports] == ["Fall 2025 Dodgeball", "Summer 2025 Kickball"]
        kickball = sports[1]
        assert (kickball.season, kickball.year) == ("Summer", 2025)
        assert kickball.gradient == "green"

    async def test_reads_are_cached(self, content, db, clock):
        await content.list_sports()
        await content.list_sports()
        assert db.calls.count(("sports_info", "select")) == 1

        clock.now += 301
        await content.list_sports()
        assert db.calls.count(("sports_info", "select")) == 2

    async def test_uncached_listing_always_queries(self, content, db):
        await content.list_sports()
        sports = await content.list_active_uncached()
        assert [s.name for s in sports] == ["Fall 2025 Dodgeball", "Summer 2025 Kickball"]
        assert db.calls.count(("sports_info", "select")) == 2

    async def test_inactive_sport_hidden(self, content):
        assert await content.get_sport("Winter 2019 Bowling") is None
        assert await content.get_sport("Nope") is None
        sport = await content.get_sport("Fall 2025 Dodgeball")
        assert sport.coming_soon

    async def test_update_clears_cache(self, content):
        await content.list_sports()
        updated = await content.update_sport(
            "Summer 2025 Kickball", SportsInfoUpdate(participants=140, gradient="purple")
        )
        assert updated.participants == 140
        assert updated.gradient == "pink"

        sports = {s.name: s for s in await content.list_sports()}
        assert sports["Summer 2025 Kickball"].participants == 140

    async def test_update_unknown_sport(self, content):
        with pytest.raises(NotFoundError):
            await content.update_sport("Curling", SportsInfoUpdate(participants=1))

    async def test_set_and_clear_next_game(self, content, db):
        sport = await content.set_next_game("Summer 2025 Kickball", date(2025, 7, 12))
        assert sport.next_game == date(2025, 7, 12)

        await content.set_next_game("Summer 2025 Kickball", None)
        row = next(r for r in db.rows("sports_info") if r["name"] == "Summer 2025 Kickball")
        assert row["next_game"] is None


class TestFeedback:

    async def test_submit_defaults(self, content):
        feedback = await content.submit_feedback(WebsiteFeedbackCreate(
            url="https://example.org/schedule",
            issue_description="Week 3 shows the wrong park",
            feedback_type=FeedbackType.CONTENT,
        ))
        assert feedback.status == FeedbackStatus.NEW
        assert feedback.priority == "medium"

    async def test_lifecycle_and_counts(self, content):
        first = await content.submit_feedback(WebsiteFeedbackCreate(issue_description="Typo"))
        second = await content.submit_feedback(WebsiteFeedbackCreate(issue_description="Broken link"))
        third = await content.submit_feedback(WebsiteFeedbackCreate(issue_description="Spam"))

        working = await content.mark_in_progress(first.id)
        assert working.status == FeedbackStatus.IN_PROGRESS

        resolved = await content.resolve_feedback(second.id, admin_notes="Fixed link")
        assert resolved.status == FeedbackStatus.RESOLVED
        assert resolved.resolved_at is not None
        assert resolved.admin_notes == "Fixed link"

        dismissed = await content.dismiss_feedback(third.id)
        assert dismissed.status == FeedbackStatus.DISMISSED
        assert dismissed.resolved_at is None

        assert await content.feedback_counts() == {
            "new": 0, "in_progress": 1, "resolved": 1, "dismissed": 1,
        }
        assert len(await content.list_feedback(FeedbackStatus.RESOLVED)) == 1

        assert await content.delete_feedback(third.id) is True
        assert len(await content.list_feedback()) == 2

    async def test_unknown_feedback(self, content):
        with pytest.raises(NotFoundError):
            await content.resolve_feedback(uuid4())
