"""
Message formatting for league views.
Plain functions over domain models so they can be reused by any handler.
"""

from html import escape
from typing import Dict, List

from core.domain.models import (
    Announcement, AnnouncementPriority, GameDetail, Schedule, Team, TeamRecord,
    PushMessage, GameStatus,
)
from core.domain.constants import SPORTS, TELEGRAM_MESSAGE_LIMIT
from locales import t

PRIORITY_ICONS = {
    AnnouncementPriority.URGENT: "\U0001f6a8",
    AnnouncementPriority.HIGH: "❗",
    AnnouncementPriority.NORMAL: "\U0001f4e2",
    AnnouncementPriority.LOW: "ℹ️",
}


def sport_label(sport: str) -> str:
    info = SPORTS.get(sport, {})
    return f"{info.get('emoji', '')} {info.get('label', sport.title())}".strip()


def format_errors(errors: Dict[str, str]) -> str:
    return "\n".join(f"• {escape(message)}" for message in errors.values())


def format_game_line(detail: GameDetail) -> str:
    game = detail.game
    home = escape(detail.home_team.name)
    away = escape(detail.away_team.name)
    if game.has_scores:
        matchup = f"{home} <b>{game.home_score} - {game.away_score}</b> {away}"
    else:
        matchup = f"{home} vs {away}"

    when = game.game_time or game.scheduled_at.strftime("%-I:%M %p")
    line = f"{game.scheduled_at.strftime('%a %b %-d')}, {when} · {matchup}"
    if game.status == GameStatus.IN_PROGRESS:
        line += " \U0001f534 LIVE"
    elif game.status in (GameStatus.CANCELLED, GameStatus.POSTPONED):
        line += f" ({game.status.value})"
    return f"{line}\n   \U0001f4cd {escape(detail.location.name)}"


def format_schedule(schedule: Schedule) -> List[str]:
    """One or more messages, weeks kept whole where they fit"""
    if not schedule.weeks:
        return [t("schedule_empty")]
    blocks = [f"<b>{sport_label(schedule.sport_type.value)} · {escape(schedule.season)}</b>"]
    for week in schedule.weeks:
        header = t(
            "week_header",
            week=week.week_number,
            start=week.start_date.strftime("%b %-d"),
            end=week.end_date.strftime("%b %-d"),
        )
        blocks.append("\n".join([header, *(format_game_line(detail) for detail in week.games)]))
    return paginate(blocks)


def format_live_scores(details: List[GameDetail]) -> str:
    if not details:
        return t("scores_empty")
    return "\n\n".join(format_game_line(detail) for detail in details)


def format_standings(teams: List[Team], records: Dict) -> str:
    if not teams:
        return t("standings_empty")

    def sort_key(team: Team):
        record: TeamRecord = records[team.id]
        return (-record.win_percentage, -record.wins, team.name)

    lines = []
    for position, team in enumerate(sorted(teams, key=sort_key), start=1):
        record = records[team.id]
        lines.append(
            f"{position}. {escape(team.name)} · {record.wins}-{record.losses} ({record.win_percentage}%)"
        )
    return "\n".join(lines)


def format_announcement(announcement: Announcement, limit: int = TELEGRAM_MESSAGE_LIMIT) -> str:
    icon = PRIORITY_ICONS.get(announcement.priority, "\U0001f4e2")
    head = f"{icon} <b>{clip(announcement.title, limit // 4)}</b>\n"
    foot = ""
    if announcement.created_at:
        foot = f"\n<i>{announcement.created_at.strftime('%b %-d, %Y')}</i>"
    return head + clip(announcement.content, limit - len(head) - len(foot)) + foot


def format_announcements(announcements: List[Announcement]) -> List[str]:
    return paginate([format_announcement(a) for a in announcements])


def format_push(message: PushMessage, limit: int = TELEGRAM_MESSAGE_LIMIT) -> str:
    head = f"<b>{clip(message.title, limit // 4)}</b>\n\n"
    return head + clip(message.body, limit - len(head))


def clip(text: str, budget: int) -> str:
    """HTML-escaped text, shortened with an ellipsis to fit `budget` characters"""
    escaped = escape(text)
    if len(escaped) <= budget:
        return escaped
    parts, used = [], 0
    for char in text:
        entity = escape(char)
        if used + len(entity) + 1 > budget:
            break
        parts.append(entity)
        used += len(entity)
    return "".join(parts).rstrip() + "…"


def paginate(blocks: List[str], limit: int = TELEGRAM_MESSAGE_LIMIT, separator: str = "\n\n") -> List[str]:
    """Pack blocks into as few messages as fit the limit, never splitting a block that fits"""
    pages: List[str] = []
    current = ""
    for block in blocks:
        pieces = [block] if len(block) <= limit else _split_lines(block, limit)
        for piece in pieces:
            candidate = f"{current}{separator}{piece}" if current else piece
            if len(candidate) <= limit:
                current = candidate
            else:
                pages.append(current)
                current = piece
    if current:
        pages.append(current)
    return pages


def _split_lines(block: str, limit: int) -> List[str]:
    pieces: List[str] = []
    current = ""
    for line in block.split("\n"):
        line = line[:limit]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) <= limit:
            current = candidate
        else:
            pieces.append(current)
            current = line
    if current:
        pieces.append(current)
    return pieces
