"""
Substitute pool sign-up - short FSM, one question per state.
"""

import logging

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext

from core.domain.models import SportType, SubstituteRegistrationCreate
from adapters.loader import Services
from adapters.telegram.states import SubstituteStates
from adapters.telegram.keyboards import (
    get_sports_keyboard,
    get_skip_keyboard,
    get_yes_no_keyboard,
    get_back_to_menu_keyboard,
)
from adapters.telegram.views import sport_label
from locales import t

logger = logging.getLogger(__name__)

router = Router()

# (field, state) in the order they are asked
QUESTIONS = [
    ("first_name", SubstituteStates.first_name),
    ("last_name", SubstituteStates.last_name),
    ("preferred_pronouns", SubstituteStates.preferred_pronouns),
    ("phone", SubstituteStates.phone),
    ("emergency_contact_name", SubstituteStates.emergency_contact_name),
    ("emergency_contact_phone", SubstituteStates.emergency_contact_phone),
    ("agreements", SubstituteStates.agreements),
]
TEXT_STATES = tuple(s for field, s in QUESTIONS if field != "agreements")
FIELD_BY_STATE = {s.state: field for field, s in QUESTIONS}
AGREEMENT_FIELDS = (
    "agree_to_liability_waiver",
    "agree_to_photo_release",
    "agree_to_text_updates",
    "confirm_age_18_plus",
)


def _keyboard(field: str):
    if field == "preferred_pronouns":
        return get_skip_keyboard("sub")
    if field == "agreements":
        return get_yes_no_keyboard("sub", "agreements")
    return None


async def _ask(message: Message, state: FSMContext, index: int, error: str = None):
    field, question_state = QUESTIONS[index]
    await state.set_state(question_state)
    text = t("sub_" + field)
    if error:
        text = f"⚠️ {error}\n\n{text}"
    await message.answer(text, reply_markup=_keyboard(field))


async def _accept(message: Message, state: FSMContext, services: Services, field: str, value: str):
    form = dict((await state.get_data()).get("form", {}))
    form[field] = value

    # only this field's error matters until the form is complete
    errors = services.registrations.validate_substitute(SubstituteRegistrationCreate(**form))
    if field in errors:
        await _ask(message, state, _index(field), error=errors[field])
        return

    await state.update_data(form=form)
    await _ask(message, state, _index(field) + 1)


def _index(field: str) -> int:
    return [f for f, _ in QUESTIONS].index(field)


# === ENTRY ===

async def _start(message: Message, state: FSMContext):
    await state.clear()
    await state.set_state(SubstituteStates.choosing_sport)
    await message.answer(t("choose_sport"), reply_markup=get_sports_keyboard("sub_sport"))


@router.message(Command("substitute"))
async def substitute_command(message: Message, state: FSMContext):
    await _start(message, state)


@router.callback_query(F.data == "menu_substitute")
async def substitute_from_menu(callback: CallbackQuery, state: FSMContext):
    await _start(callback.message, state)
    await callback.answer()


@router.callback_query(SubstituteStates.choosing_sport, F.data.startswith("sub_sport:"))
async def sport_chosen(callback: CallbackQuery, state: FSMContext):
    sport = SportType(callback.data.split(":", 1)[1])
    await state.update_data(sport=sport.value, form={})
    await callback.answer()
    await callback.message.answer(t("sub_header", sport=sport_label(sport.value)))
    await _ask(callback.message, state, 0)


# === ANSWERS ===

@router.message(StateFilter(*TEXT_STATES), F.text, ~F.text.startswith("/"))
async def text_answer(message: Message, state: FSMContext, services: Services):
    field = FIELD_BY_STATE[await state.get_state()]
    await _accept(message, state, services, field, message.text.strip())


@router.callback_query(SubstituteStates.preferred_pronouns, F.data == "sub_skip")
async def skip_pronouns(callback: CallbackQuery, state: FSMContext, services: Services):
    await callback.answer()
    await _accept(callback.message, state, services, "preferred_pronouns", "")


@router.callback_query(SubstituteStates.agreements, F.data.startswith("sub:agreements:"))
async def agreements_answer(callback: CallbackQuery, state: FSMContext, services: Services):
    agreed = callback.data.endswith(":yes")
    await callback.answer()

    data = await state.get_data()
    form = SubstituteRegistrationCreate(
        **data.get("form", {}),
        **{field: agreed for field in AGREEMENT_FIELDS},
    )
    result = await services.registrations.submit_substitute_registration(
        SportType(data["sport"]), form
    )

    if not result.success:
        logger.info(f"Substitute form rejected for user {callback.from_user.id}: {result.message}")
        if agreed:
            await state.clear()
            await callback.message.answer(f"⚠️ {result.message}", reply_markup=get_back_to_menu_keyboard())
        else:
            await _ask(callback.message, state, _index("agreements"), error=result.message)
        return

    await state.clear()
    await callback.message.answer(f"\U0001f389 {result.message}", reply_markup=get_back_to_menu_keyboard())
