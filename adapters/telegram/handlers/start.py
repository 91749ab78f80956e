"""
Start handler - /start command, main menu and fallbacks.
"""

import logging

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.filters import Command, CommandStart, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.exceptions import TelegramBadRequest

from adapters.telegram.keyboards import get_main_menu_keyboard
from locales import t

logger = logging.getLogger(__name__)

router = Router()


@router.message(CommandStart())
async def start_command(message: Message, state: FSMContext):
    await state.clear()
    name = message.from_user.first_name if message.from_user else "there"
    await message.answer(t("welcome", name=name))
    await message.answer(t("menu_header"), reply_markup=get_main_menu_keyboard())


@router.message(Command("help"))
async def help_command(message: Message):
    await message.answer(t("help"))


@router.message(Command("cancel"), StateFilter("*"))
async def cancel_command(message: Message, state: FSMContext):
    if await state.get_state() is not None:
        logger.info(f"User {message.from_user.id} cancelled form at {await state.get_state()}")
    await state.clear()
    await message.answer(t("cancelled"), reply_markup=get_main_menu_keyboard())


@router.callback_query(F.data == "back_to_menu")
async def back_to_menu(callback: CallbackQuery, state: FSMContext):
    await state.clear()
    try:
        await callback.message.edit_text(t("menu_header"), reply_markup=get_main_menu_keyboard())
    except TelegramBadRequest:
        # message too old to edit or unchanged
        await callback.message.answer(t("menu_header"), reply_markup=get_main_menu_keyboard())
    await callback.answer()


@router.callback_query()
async def unknown_callback(callback: CallbackQuery):
    logger.debug(f"Unhandled callback: {callback.data}")
    await callback.answer()


@router.message()
async def fallback_message(message: Message):
    await message.answer(t("unknown_input"), reply_markup=get_main_menu_keyboard())
