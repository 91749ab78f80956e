"""
Read-only league views (schedule, live scores, standings, announcements)
plus announcement subscriptions and the admin stats command.
"""

import logging
from typing import List

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.filters import Command

from config.settings import settings
from core.domain.models import SportType, DevicePlatform, PushTokenCreate, TargetAudience
from adapters.loader import Services
from adapters.telegram.keyboards import (
    get_sports_keyboard,
    get_subscribe_keyboard,
    get_back_to_menu_keyboard,
)
from adapters.telegram.views import (
    format_schedule,
    format_live_scores,
    format_standings,
    format_announcements,
    sport_label,
)
from locales import t

logger = logging.getLogger(__name__)

router = Router()

ANNOUNCEMENTS_SHOWN = 5


def telegram_user_id(telegram_id: int) -> str:
    """Push-token owner id for a Telegram account"""
    return f"telegram:{telegram_id}"


def telegram_device_id(chat_id: int) -> str:
    return f"telegram-{chat_id}"


async def send_pages(message: Message, pages: List[str]):
    """Send a multi-part view; the menu button goes on the last part"""
    for page in pages[:-1]:
        await message.answer(page)
    await message.answer(pages[-1], reply_markup=get_back_to_menu_keyboard())


# === SCHEDULE ===

@router.message(Command("schedule"))
async def schedule_command(message: Message):
    await message.answer(t("choose_sport"), reply_markup=get_sports_keyboard("schedule"))


@router.callback_query(F.data == "menu_schedule")
async def schedule_from_menu(callback: CallbackQuery):
    await callback.message.answer(t("choose_sport"), reply_markup=get_sports_keyboard("schedule"))
    await callback.answer()


@router.callback_query(F.data.startswith("schedule:"))
async def show_schedule(callback: CallbackQuery, services: Services):
    sport = SportType(callback.data.split(":", 1)[1])
    await callback.answer()
    schedule = await services.league.get_schedule(sport)
    await send_pages(callback.message, format_schedule(schedule))


# === LIVE SCORES ===

async def _send_live_scores(message: Message, services: Services):
    games = await services.scores.get_live_games()
    await message.answer(format_live_scores(games), reply_markup=get_back_to_menu_keyboard())


@router.message(Command("scores"))
async def scores_command(message: Message, services: Services):
    await _send_live_scores(message, services)


@router.callback_query(F.data == "menu_scores")
async def scores_from_menu(callback: CallbackQuery, services: Services):
    await callback.answer()
    await _send_live_scores(callback.message, services)


# === STANDINGS ===

@router.message(Command("standings"))
async def standings_command(message: Message):
    await message.answer(t("choose_sport"), reply_markup=get_sports_keyboard("standings"))


@router.callback_query(F.data == "menu_standings")
async def standings_from_menu(callback: CallbackQuery):
    await callback.message.answer(t("choose_sport"), reply_markup=get_sports_keyboard("standings"))
    await callback.answer()


@router.callback_query(F.data.startswith("standings:"))
async def show_standings(callback: CallbackQuery, services: Services):
    sport = SportType(callback.data.split(":", 1)[1])
    await callback.answer()
    teams = await services.league.list_teams(sport)
    records = await services.league.get_team_records([team.id for team in teams], sport)
    text = f"<b>{sport_label(sport.value)}</b>\n\n{format_standings(teams, records)}"
    await callback.message.answer(text, reply_markup=get_back_to_menu_keyboard())


# === ANNOUNCEMENTS ===

async def _send_announcements(message: Message, services: Services):
    announcements = await services.announcements.get_active(
        audience=TargetAudience.ALL, limit=ANNOUNCEMENTS_SHOWN,
    )
    if not announcements:
        await message.answer(t("news_empty"), reply_markup=get_back_to_menu_keyboard())
        return
    await send_pages(message, format_announcements(announcements))


@router.message(Command("announcements"))
async def announcements_command(message: Message, services: Services):
    await _send_announcements(message, services)


@router.callback_query(F.data == "menu_news")
async def announcements_from_menu(callback: CallbackQuery, services: Services):
    await callback.answer()
    await _send_announcements(callback.message, services)


# === SUBSCRIPTIONS ===

async def _subscribe(services: Services, telegram_id: int, chat_id: int):
    await services.notifications.register_token(
        telegram_user_id(telegram_id),
        PushTokenCreate(
            push_token=str(chat_id),
            platform=DevicePlatform.TELEGRAM,
            device_id=telegram_device_id(chat_id),
        ),
    )


async def _unsubscribe(services: Services, telegram_id: int, chat_id: int):
    await services.notifications.unregister_token(
        telegram_user_id(telegram_id), telegram_device_id(chat_id)
    )


@router.message(Command("subscribe"))
async def subscribe_command(message: Message, services: Services):
    await _subscribe(services, message.from_user.id, message.chat.id)
    await message.answer(t("subscribed"))


@router.message(Command("unsubscribe"))
async def unsubscribe_command(message: Message, services: Services):
    await _unsubscribe(services, message.from_user.id, message.chat.id)
    await message.answer(t("unsubscribed"))


@router.callback_query(F.data == "menu_subscribe")
async def subscribe_from_menu(callback: CallbackQuery):
    await callback.message.answer(t("subscribe_prompt"), reply_markup=get_subscribe_keyboard())
    await callback.answer()


@router.callback_query(F.data.startswith("subscribe:"))
async def subscribe_choice(callback: CallbackQuery, services: Services):
    chat_id = callback.message.chat.id
    if callback.data == "subscribe:on":
        await _subscribe(services, callback.from_user.id, chat_id)
        text = t("subscribed")
    else:
        await _unsubscribe(services, callback.from_user.id, chat_id)
        text = t("unsubscribed")
    await callback.answer()
    await callback.message.answer(text, reply_markup=get_back_to_menu_keyboard())


# === ADMIN ===

@router.message(Command("stats"))
async def stats_command(message: Message, services: Services):
    if message.from_user.id not in settings.admin_telegram_ids:
        await message.answer(t("admin_only"))
        return

    stats = await services.league.get_stats()
    lines = [t(
        "stats",
        teams=stats.total_teams,
        players=stats.total_players,
        games=stats.total_games,
        upcoming=stats.upcoming_games,
        completed=stats.completed_games,
        locations=stats.total_locations,
    )]
    for summary in await services.registrations.get_summary():
        counts = ", ".join(f"{status} {count}" for status, count in summary.by_status.items())
        lines.append(f"{sport_label(summary.sport_type.value)} registrations: {summary.total} ({counts})")
    await message.answer("\n".join(lines))
