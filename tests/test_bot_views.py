"""Tests for Telegram message formatting and throttling"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from aiogram.types import CallbackQuery, Chat, Message, User

from core.domain.models import (
    SportType, GameStatus, AnnouncementPriority, Announcement, Game, GameDetail, Location,
    Schedule, ScheduleWeek, Team, TeamRecord, PushMessage, PushToken, DevicePlatform,
)
from core.domain.constants import TELEGRAM_MESSAGE_LIMIT
from adapters.telegram.middleware import ThrottlingMiddleware
from adapters.telegram.views import (
    clip, format_announcement, format_announcements, format_errors, format_game_line,
    format_live_scores, format_push, format_schedule, format_standings, paginate, sport_label,
)
from adapters.telegram.messenger import TelegramSender
from locales import t

KICKOFF = datetime(2025, 7, 5, 18, 0, tzinfo=timezone.utc)


def team(name):
    return Team(id=uuid4(), name=name, sport=SportType.KICKBALL)


def detail(status=GameStatus.SCHEDULED, home_score=None, away_score=None, game_time=""):
    home, away = team("Rainbow <Rockets>"), team("Glitter Bombers")
    location = Location(id=uuid4(), name="Dolores Park", address="Dolores St")
    game = Game(
        id=uuid4(), home_team_id=home.id, away_team_id=away.id, location_id=location.id,
        scheduled_at=KICKOFF, sport_type=SportType.KICKBALL, status=status,
        home_score=home_score, away_score=away_score, game_time=game_time,
    )
    return GameDetail(game=game, home_team=home, away_team=away, location=location)


class TestViews:

    def test_sport_label(self):
        assert sport_label("kickball") == "🟠 Kickball"
        assert sport_label("curling") == "Curling"

    def test_errors_are_escaped_bullets(self):
        assert format_errors({"a": "Bad <input>", "b": "Missing"}) == "• Bad &lt;input&gt;\n• Missing"

    def test_scheduled_game_line(self):
        line = format_game_line(detail())
        assert line == (
            "Sat Jul 5, 6:00 PM · Rainbow &lt;Rockets&gt; vs Glitter Bombers\n"
            "   📍 Dolores Park"
        )

    def test_live_game_shows_score(self):
        line = format_game_line(detail(GameStatus.IN_PROGRESS, 3, 2, game_time="6:30 PM"))
        assert "6:30 PM" in line
        assert "<b>3 - 2</b>" in line
        assert "LIVE" in line

    def test_postponed_marked(self):
        assert "(postponed)" in format_game_line(detail(GameStatus.POSTPONED))

    def test_empty_states(self):
        assert format_live_scores([]) == t("scores_empty")
        assert format_standings([], {}) == t("standings_empty")
        empty = Schedule(season="Summer 2025", sport_type=SportType.KICKBALL)
        assert format_schedule(empty) == [t("schedule_empty")]

    def test_schedule_has_week_headers(self):
        game = detail()
        schedule = Schedule(
            season="Summer 2025",
            sport_type=SportType.KICKBALL,
            weeks=[ScheduleWeek(week_number=1, start_date=KICKOFF, end_date=KICKOFF, games=[game])],
            total_weeks=1,
        )
        pages = format_schedule(schedule)
        assert len(pages) == 1
        text = pages[0]
        assert text.startswith("<b>🟠 Kickball · Summer 2025</b>")
        assert "<b>Week 1</b> · Jul 5 - Jul 5" in text

    def test_standings_order(self):
        a, b, c = team("Aces"), team("Bolts"), team("Comets")
        records = {
            a.id: TeamRecord(wins=1, losses=1, win_percentage=50, total_games=2),
            b.id: TeamRecord(wins=3, losses=1, win_percentage=75, total_games=4),
            c.id: TeamRecord(wins=2, losses=2, win_percentage=50, total_games=4),
        }
        lines = format_standings([a, b, c], records).splitlines()
        assert lines == [
            "1. Bolts · 3-1 (75%)",
            "2. Comets · 2-2 (50%)",
            "3. Aces · 1-1 (50%)",
        ]

    def test_announcement(self):
        announcement = Announcement(
            id=uuid4(), title="Rain & wind", content="Stay home",
            priority=AnnouncementPriority.URGENT, created_at=KICKOFF,
        )
        assert format_announcement(announcement) == (
            "🚨 <b>Rain &amp; wind</b>\nStay home\n<i>Jul 5, 2025</i>"
        )

    def test_push(self):
        assert format_push(PushMessage(title="📢 Hi", body="a < b")) == "<b>📢 Hi</b>\n\na &lt; b"


class TestMessageLimit:

    def test_long_push_is_clipped(self):
        text = format_push(PushMessage(title="Field closed", body="x" * 5000))
        assert len(text) <= TELEGRAM_MESSAGE_LIMIT
        assert text.startswith("<b>Field closed</b>\n\n")
        assert text.endswith("…")

    def test_clip_counts_escaped_length(self):
        clipped = clip("&" * 100, 50)
        assert len(clipped) <= 50
        # never cut inside an entity
        assert clipped == "&amp;" * 9 + "…"

    def test_short_text_untouched(self):
        assert clip("Rain & wind", 100) == "Rain &amp; wind"

    def test_long_announcement_is_clipped(self):
        announcement = Announcement(
            id=uuid4(), title="Season update", content="<" * 5000, created_at=KICKOFF,
        )
        text = format_announcement(announcement)
        assert len(text) <= TELEGRAM_MESSAGE_LIMIT
        assert text.endswith("…\n<i>Jul 5, 2025</i>")

    def test_announcements_split_across_messages(self):
        announcements = [
            Announcement(id=uuid4(), title=f"Update {i}", content="y" * 3000) for i in range(3)
        ]
        pages = format_announcements(announcements)
        assert len(pages) == 3
        assert all(len(page) <= TELEGRAM_MESSAGE_LIMIT for page in pages)

    def test_full_season_schedule_pages_by_week(self):
        weeks = [
            ScheduleWeek(week_number=n, start_date=KICKOFF, end_date=KICKOFF, games=[detail()] * 12)
            for n in range(1, 21)
        ]
        schedule = Schedule(season="Summer 2025", sport_type=SportType.KICKBALL, weeks=weeks, total_weeks=20)

        pages = format_schedule(schedule)

        assert len(pages) > 1
        assert all(len(page) <= TELEGRAM_MESSAGE_LIMIT for page in pages)
        joined = "\n\n".join(pages)
        for n in range(1, 21):
            assert joined.count(f"<b>Week {n}</b>") == 1
        # weeks are never cut in half
        for page in pages[1:]:
            assert page.startswith("<b>Week ")

    def test_oversized_block_split_on_lines(self):
        block = "\n".join(f"line {i:03d} " + "z" * 40 for i in range(10))
        pages = paginate([block], limit=120)
        assert all(len(page) <= 120 for page in pages)
        assert "\n".join(pages) == block

    async def test_telegram_sender_stays_under_limit(self):
        sent = []

        class RecordingBot:
            async def send_message(self, chat_id, text):
                sent.append((chat_id, text))

        token = PushToken(id=uuid4(), user_id="telegram:42", push_token="42", platform=DevicePlatform.TELEGRAM)
        ok = await TelegramSender(RecordingBot()).send(token, PushMessage(title="📢 Notice", body="w" * 5000))

        assert ok is True
        assert sent[0][0] == 42
        assert len(sent[0][1]) <= TELEGRAM_MESSAGE_LIMIT


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


USER = User(id=42, is_bot=False, first_name="Sam")


def message(text="/schedule"):
    return Message(
        message_id=1,
        date=KICKOFF,
        chat=Chat(id=42, type="private"),
        from_user=USER,
        text=text,
    )


def callback(data):
    return CallbackQuery(id="1", from_user=USER, chat_instance="ci", data=data)


class TestThrottlingMiddleware:

    @pytest.fixture(autouse=True)
    def replies(self, monkeypatch):
        sent = []

        async def fake_message_answer(self, text, **kwargs):
            sent.append(text)

        async def fake_callback_answer(self, text=None, **kwargs):
            sent.append(text)

        monkeypatch.setattr(Message, "answer", fake_message_answer)
        monkeypatch.setattr(CallbackQuery, "answer", fake_callback_answer)
        return sent

    @staticmethod
    async def handler(event, data):
        return "handled"

    async def test_drops_over_limit(self, replies):
        clock = FakeClock()
        middleware = ThrottlingMiddleware(default_limit=2, interval=60, clock=clock)

        assert await middleware(self.handler, message(), {}) == "handled"
        assert await middleware(self.handler, message(), {}) == "handled"
        assert await middleware(self.handler, message(), {}) is None
        assert replies == [t("throttled")]

        clock.now = 61
        assert await middleware(self.handler, message(), {}) == "handled"

    async def test_submissions_have_stricter_limit(self, replies):
        clock = FakeClock()
        middleware = ThrottlingMiddleware(default_limit=30, interval=60, clock=clock)

        results = [await middleware(self.handler, callback("waiver_ack"), {}) for _ in range(6)]
        assert results == ["handled"] * 5 + [None]
        assert replies == [t("throttled_short")]

        assert await middleware(self.handler, callback("menu_schedule"), {}) == "handled"
