"""
Inline keyboards for Telegram bot.
"""

from typing import Optional

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from aiogram.utils.keyboard import InlineKeyboardBuilder

from core.domain.constants import SPORTS, SHIRT_SIZES, EXPERIENCE_LEVELS, HEAR_ABOUT_OPTIONS
from locales import t


# === MENU ===

def get_main_menu_keyboard(lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("menu_register", lang), callback_data="menu_register")
    builder.button(text=t("menu_substitute", lang), callback_data="menu_substitute")
    builder.button(text=t("menu_waiver", lang), callback_data="menu_waiver")
    builder.button(text=t("menu_schedule", lang), callback_data="menu_schedule")
    builder.button(text=t("menu_scores", lang), callback_data="menu_scores")
    builder.button(text=t("menu_standings", lang), callback_data="menu_standings")
    builder.button(text=t("menu_news", lang), callback_data="menu_news")
    builder.button(text=t("menu_subscribe", lang), callback_data="menu_subscribe")
    builder.adjust(2)
    return builder.as_markup()


def get_back_to_menu_keyboard(lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("back_to_menu", lang), callback_data="back_to_menu")
    return builder.as_markup()


def get_sports_keyboard(prefix: str) -> InlineKeyboardMarkup:
    """One button per sport: callback '<prefix>:<sport>'"""
    builder = InlineKeyboardBuilder()
    for key, info in SPORTS.items():
        builder.button(text=f"{info['emoji']} {info['label']}", callback_data=f"{prefix}:{key}")
    builder.adjust(2)
    return builder.as_markup()


# === FORMS ===

def get_choice_keyboard(prefix: str, field: str, options: dict, columns: int = 1,
                        skippable: bool = False, lang: str = "en") -> InlineKeyboardMarkup:
    """options: {value: label}; callback '<prefix>:<field>:<value>'"""
    builder = InlineKeyboardBuilder()
    for value, label in options.items():
        builder.button(text=label, callback_data=f"{prefix}:{field}:{value}")
    builder.adjust(columns)
    if skippable:
        builder.row(InlineKeyboardButton(text=t("skip", lang), callback_data=f"{prefix}_skip"))
    return builder.as_markup()


def get_shirt_size_keyboard(prefix: str = "reg") -> InlineKeyboardMarkup:
    return get_choice_keyboard(prefix, "shirt_size", {s: s for s in SHIRT_SIZES}, columns=3)


def get_experience_keyboard(prefix: str = "reg") -> InlineKeyboardMarkup:
    return get_choice_keyboard(prefix, "experience_level", EXPERIENCE_LEVELS)


def get_hear_about_keyboard(prefix: str = "reg", lang: str = "en") -> InlineKeyboardMarkup:
    # option labels are too long for callback data, send the index
    options = {str(i): label for i, label in enumerate(HEAR_ABOUT_OPTIONS)}
    return get_choice_keyboard(prefix, "how_did_you_hear", options, columns=2,
                               skippable=True, lang=lang)


def get_yes_no_keyboard(prefix: str, field: str, lang: str = "en") -> InlineKeyboardMarkup:
    return get_choice_keyboard(prefix, field, {"yes": t("yes", lang), "no": t("no", lang)}, columns=2)


def get_skip_keyboard(prefix: str, lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("skip", lang), callback_data=f"{prefix}_skip")
    return builder.as_markup()


def get_wizard_nav_keyboard(base: InlineKeyboardMarkup = None, can_go_back: bool = False,
                            lang: str = "en") -> Optional[InlineKeyboardMarkup]:
    """Add a back-a-step button under an optional field keyboard"""
    if not can_go_back:
        return base
    builder = InlineKeyboardBuilder.from_markup(base) if base else InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text=t("back", lang), callback_data="reg_back"))
    return builder.as_markup()


def get_retry_keyboard(callback_data: str, lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("try_again", lang), callback_data=callback_data)
    builder.button(text=t("back_to_menu", lang), callback_data="back_to_menu")
    builder.adjust(1)
    return builder.as_markup()


# === WAIVERS ===

def get_waiver_type_keyboard(lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("waiver_liability", lang), callback_data="waiver_type:liability")
    builder.button(text=t("waiver_photo_release", lang), callback_data="waiver_type:photo_release")
    builder.adjust(1)
    return builder.as_markup()


def get_photo_permission_keyboard(lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("photo_grant", lang), callback_data="waiver_photo:grant")
    builder.button(text=t("photo_withhold", lang), callback_data="waiver_photo:withhold")
    builder.adjust(2)
    return builder.as_markup()


def get_waiver_confirm_keyboard(lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("waiver_confirm", lang), callback_data="waiver_ack")
    return builder.as_markup()


# === NOTIFICATIONS ===

def get_subscribe_keyboard(lang: str = "en") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text=t("subscribe_on", lang), callback_data="subscribe:on")
    builder.button(text=t("subscribe_off", lang), callback_data="subscribe:off")
    builder.adjust(2)
    return builder.as_markup()
