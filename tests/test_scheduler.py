"""Tests for core/services/scheduler_service.py"""

from datetime import date, datetime, timedelta, timezone

from adapters.loader import build_scheduler

NOW = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)


def _sport_row(db, name):
    return next(r for r in db.rows("sports_info") if r["name"] == name)


class TestSchedulerTick:

    async def test_refreshes_next_game_per_sport(self, services, db, league_data):
        db.seed(
            "sports_info",
            {"name": "Summer 2025 Kickball", "is_active": True, "next_game": "2025-06-01"},
            {"name": "Summer 2025 Dodgeball", "is_active": True, "next_game": "2025-06-02"},
            {"name": "Community Picnic", "is_active": True, "next_game": "2025-06-03"},
        )
        scheduler = build_scheduler(services)

        assert await scheduler.run_once(now=NOW) is True

        assert _sport_row(db, "Summer 2025 Kickball")["next_game"] == "2025-07-12"
        assert _sport_row(db, "Summer 2025 Dodgeball")["next_game"] is None
        assert _sport_row(db, "Community Picnic")["next_game"] == "2025-06-03"

    async def test_unchanged_next_game_not_rewritten(self, services, db, league_data):
        db.seed("sports_info", {"name": "Summer 2025 Kickball", "is_active": True, "next_game": "2025-07-12"})
        scheduler = build_scheduler(services)

        await scheduler.run_once(now=NOW)
        assert ("sports_info", "update") not in db.calls

    async def test_retires_expired_announcements(self, services, db):
        db.seed(
            "announcements",
            {"title": "Old", "content": "x", "is_active": True,
             "expires_at": (NOW - timedelta(days=1)).isoformat()},
        )
        scheduler = build_scheduler(services)

        await scheduler.run_once(now=NOW)
        assert db.rows("announcements")[0]["is_active"] is False

    async def test_failed_tick_reported_not_raised(self, services, db):
        db.fail_next("sports_info", code="42P01", message="relation does not exist")
        scheduler = build_scheduler(services)

        assert await scheduler.run_once(now=NOW) is False
        # next tick works again
        assert await scheduler.run_once(now=NOW) is True

    async def test_stop_ends_loop(self, services):
        scheduler = build_scheduler(services)
        scheduler.interval_seconds = 0

        async def stop_after_first_tick(now=None):
            await scheduler.stop()
            return True

        scheduler.run_once = stop_after_first_tick
        await scheduler.run()
        assert scheduler._running is False


class TestNextGameDate:

    async def test_next_game_is_a_date(self, services, db, league_data):
        db.seed("sports_info", {"name": "Summer 2025 Kickball", "is_active": True})
        await build_scheduler(services).run_once(now=NOW)
        info = await services.content.get_sport("Summer 2025 Kickball")
        assert info.next_game == date(2025, 7, 12)


class TestOverlappingTicks:

    async def test_tick_skipped_while_previous_runs(self, services, db):
        scheduler = build_scheduler(services)
        calls_before = list(db.calls)

        async with scheduler._tick_lock:
            assert await scheduler.run_once(now=NOW) is False

        assert db.calls == calls_before
        assert scheduler._tick_count == 0
