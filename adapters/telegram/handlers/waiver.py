"""
Waiver signing FSM: type -> name -> dob -> signature -> acknowledgments.
"""

import logging
from datetime import date, datetime
from typing import Optional

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext

from core.domain.models import WaiverType, WaiverSignatureData, ClientInfo
from core.services.waiver_service import validate_waiver
from adapters.loader import Services
from adapters.telegram.states import WaiverStates
from adapters.telegram.keyboards import (
    get_waiver_type_keyboard,
    get_photo_permission_keyboard,
    get_waiver_confirm_keyboard,
    get_retry_keyboard,
    get_back_to_menu_keyboard,
)
from adapters.telegram.views import format_errors
from locales import t

logger = logging.getLogger(__name__)

router = Router()

DOB_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%m-%d-%Y")


def parse_dob(text: str) -> Optional[date]:
    for fmt in DOB_FORMATS:
        try:
            return datetime.strptime(text.strip(), fmt).date()
        except ValueError:
            continue
    return None


def _form(data: dict, **overrides) -> WaiverSignatureData:
    fields = dict(data.get("waiver", {}))
    fields.update(overrides)
    return WaiverSignatureData(**fields)


def _field_error(form: WaiverSignatureData, field: str) -> Optional[str]:
    return validate_waiver(form).get(field)


async def _start(message: Message, state: FSMContext):
    await state.clear()
    await state.set_state(WaiverStates.choosing_type)
    await message.answer(t("waiver_choose_type"), reply_markup=get_waiver_type_keyboard())


@router.message(Command("waiver"))
async def waiver_command(message: Message, state: FSMContext):
    await _start(message, state)


@router.callback_query(F.data == "menu_waiver")
async def waiver_from_menu(callback: CallbackQuery, state: FSMContext):
    await _start(callback.message, state)
    await callback.answer()


@router.callback_query(WaiverStates.choosing_type, F.data.startswith("waiver_type:"))
async def type_chosen(callback: CallbackQuery, state: FSMContext):
    waiver_type = WaiverType(callback.data.split(":", 1)[1])
    await state.update_data(waiver={"waiver_type": waiver_type.value})
    await state.set_state(WaiverStates.name)
    await callback.answer()
    await callback.message.answer(t("waiver_name"))


@router.message(WaiverStates.name, F.text, ~F.text.startswith("/"))
async def name_entered(message: Message, state: FSMContext):
    name = message.text.strip()
    error = _field_error(_form(await state.get_data(), participant_name=name), "participant_name")
    if error:
        await message.answer(f"⚠️ {error}\n\n{t('waiver_name')}")
        return

    data = await state.get_data()
    await state.update_data(waiver={**data["waiver"], "participant_name": name})
    await state.set_state(WaiverStates.dob)
    await message.answer(t("waiver_dob"))


@router.message(WaiverStates.dob, F.text, ~F.text.startswith("/"))
async def dob_entered(message: Message, state: FSMContext):
    dob = parse_dob(message.text)
    if not dob:
        await message.answer(t("waiver_dob_format"))
        return

    data = await state.get_data()
    error = _field_error(_form(data, participant_dob=dob), "participant_dob")
    if error:
        await message.answer(f"⚠️ {error}")
        await state.clear()
        return

    await state.update_data(waiver={**data["waiver"], "participant_dob": dob.isoformat()})
    await state.set_state(WaiverStates.signature)
    await message.answer(t("waiver_signature"))


@router.message(WaiverStates.signature, F.text, ~F.text.startswith("/"))
async def signature_entered(message: Message, state: FSMContext):
    signature = message.text.strip()
    data = await state.get_data()
    error = _field_error(_form(data, digital_signature=signature), "digital_signature")
    if error:
        await message.answer(f"⚠️ {error}\n\n{t('waiver_signature')}")
        return

    waiver = {**data["waiver"], "digital_signature": signature}
    await state.update_data(waiver=waiver)

    if waiver["waiver_type"] == WaiverType.PHOTO_RELEASE.value:
        await state.set_state(WaiverStates.photo_permission)
        await message.answer(t("waiver_photo_permission"), reply_markup=get_photo_permission_keyboard())
        return
    await _ask_acknowledgments(message, state, waiver)


@router.callback_query(WaiverStates.photo_permission, F.data.startswith("waiver_photo:"))
async def photo_permission_chosen(callback: CallbackQuery, state: FSMContext):
    data = await state.get_data()
    waiver = {**data["waiver"], "photo_permission": callback.data.split(":", 1)[1]}
    await state.update_data(waiver=waiver)
    await callback.answer()
    await _ask_acknowledgments(callback.message, state, waiver)


async def _ask_acknowledgments(message: Message, state: FSMContext, waiver: dict):
    await state.set_state(WaiverStates.acknowledgments)
    # photo release has no separate terms box
    terms = "" if waiver["waiver_type"] == WaiverType.PHOTO_RELEASE.value else t("waiver_acknowledge_terms")
    await message.answer(t("waiver_acknowledge", terms=terms), reply_markup=get_waiver_confirm_keyboard())


@router.callback_query(WaiverStates.acknowledgments, F.data == "waiver_ack")
async def acknowledged(callback: CallbackQuery, state: FSMContext, services: Services):
    data = await state.get_data()
    await callback.answer()

    form = _form(
        data,
        acknowledge_terms=True,
        voluntary_signature=True,
        legal_age_certification=True,
    )
    client_info = ClientInfo(user_agent=f"telegram-bot/{callback.from_user.id}")
    result = await services.waivers.submit_waiver(form, client_info)

    if not result.success:
        text = result.message
        if result.errors:
            text += "\n\n" + format_errors(result.errors)
        await callback.message.answer(f"⚠️ {text}", reply_markup=get_retry_keyboard("waiver_ack"))
        return

    logger.info(f"[WAIVER] Telegram user {callback.from_user.id} signed {form.waiver_type.value}")
    await state.clear()
    await callback.message.answer(
        t("waiver_done", message=result.message, confirmation=result.confirmation_number),
        reply_markup=get_back_to_menu_keyboard(),
    )
