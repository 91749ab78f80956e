"""
Player registration - the 4-step wizard as an FSM.

Each step state asks its fields one at a time. Answers go through the
same step validation the website uses, and the wizard itself lives in
FSM data between updates.
"""

import logging
from typing import Optional, Union

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery, InlineKeyboardMarkup
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State

from core.domain.models import SportType
from core.domain.constants import REGISTRATION_STEPS, HEAR_ABOUT_OPTIONS
from core.services.registration_service import RegistrationWizard, validate_step
from adapters.loader import Services
from adapters.telegram.states import RegistrationStates
from adapters.telegram.keyboards import (
    get_sports_keyboard,
    get_shirt_size_keyboard,
    get_experience_keyboard,
    get_hear_about_keyboard,
    get_yes_no_keyboard,
    get_skip_keyboard,
    get_wizard_nav_keyboard,
    get_retry_keyboard,
    get_back_to_menu_keyboard,
)
from adapters.telegram.views import sport_label, format_errors
from locales import t

logger = logging.getLogger(__name__)

router = Router()

STEP_STATES = {
    1: RegistrationStates.contact,
    2: RegistrationStates.details,
    3: RegistrationStates.experience,
    4: RegistrationStates.agreement,
}
WIZARD_STATES = tuple(STEP_STATES.values())

OPTIONAL_FIELDS = {"dietary_restrictions", "medical_conditions"}
BOOLEAN_FIELDS = {"agree_to_terms", "agree_to_email_updates"}

Answer = Union[Message, CallbackQuery]


def _field_keyboard(field: str) -> Optional[InlineKeyboardMarkup]:
    if field == "shirt_size":
        return get_shirt_size_keyboard()
    if field == "experience_level":
        return get_experience_keyboard()
    if field == "how_did_you_hear":
        return get_hear_about_keyboard()
    if field in BOOLEAN_FIELDS:
        return get_yes_no_keyboard("reg", field)
    if field in OPTIONAL_FIELDS:
        return get_skip_keyboard("reg")
    return None


async def _load(state: FSMContext) -> Optional[RegistrationWizard]:
    data = await state.get_data()
    if "wizard" not in data:
        return None
    return RegistrationWizard.from_dict(data["wizard"])


async def _ask(target: Message, state: FSMContext, wizard: RegistrationWizard,
               field: str, error: Optional[str] = None):
    """Prompt for one field and remember which one we're waiting for"""
    await state.set_state(STEP_STATES[wizard.current_step])
    await state.update_data(wizard=wizard.to_dict(), field=field)

    header = t(
        "reg_step",
        sport=sport_label(wizard.sport.value),
        step=wizard.current_step,
        total=wizard.total_steps,
        progress=int(wizard.progress),
    )
    text = f"{header}\n\n{t('reg_' + field)}"
    if error:
        text = f"⚠️ {error}\n\n{text}"

    first_field = REGISTRATION_STEPS[wizard.current_step][0]
    keyboard = get_wizard_nav_keyboard(
        _field_keyboard(field),
        can_go_back=field == first_field and wizard.current_step > 1,
    )
    await target.answer(text, reply_markup=keyboard)


async def _accept(target: Message, state: FSMContext, services: Services, field: str, value):
    """Store an answer, then move to the next field, step or submit"""
    wizard = await _load(state)
    if not wizard:
        await state.clear()
        await target.answer(t("unknown_input"), reply_markup=get_back_to_menu_keyboard())
        return

    wizard.update(**{field: value})
    errors = validate_step(wizard.draft, wizard.current_step)
    if field in errors:
        await _ask(target, state, wizard, field, error=errors[field])
        return

    fields = REGISTRATION_STEPS[wizard.current_step]
    position = fields.index(field)
    if position + 1 < len(fields):
        await _ask(target, state, wizard, fields[position + 1])
        return

    if wizard.is_last_step:
        await state.update_data(wizard=wizard.to_dict())
        await _submit(target, state, services, wizard)
        return

    if not wizard.next():
        # an earlier field in this step went stale
        bad_field = next(iter(wizard.errors))
        await _ask(target, state, wizard, bad_field, error=wizard.errors[bad_field])
        return
    await _ask(target, state, wizard, REGISTRATION_STEPS[wizard.current_step][0])


async def _submit(target: Message, state: FSMContext, services: Services,
                  wizard: RegistrationWizard):
    await target.answer(t("reg_submitting"))
    result = await services.registrations.submit_player_registration(wizard.sport, wizard.draft)

    if result.success:
        logger.info(f"Telegram registration {result.id} for {wizard.sport.value}")
        await state.clear()
        await target.answer(f"\U0001f389 {result.message}", reply_markup=get_back_to_menu_keyboard())
        return

    text = result.message
    if result.errors:
        text += "\n\n" + format_errors(result.errors)
    await target.answer(f"⚠️ {text}", reply_markup=get_retry_keyboard("reg_submit"))


# === ENTRY ===

async def _start(message: Message, state: FSMContext):
    await state.clear()
    await state.set_state(RegistrationStates.choosing_sport)
    await message.answer(t("choose_sport"), reply_markup=get_sports_keyboard("reg_sport"))


@router.message(Command("register"))
async def register_command(message: Message, state: FSMContext):
    await _start(message, state)


@router.callback_query(F.data == "menu_register")
async def register_from_menu(callback: CallbackQuery, state: FSMContext):
    await _start(callback.message, state)
    await callback.answer()


@router.callback_query(RegistrationStates.choosing_sport, F.data.startswith("reg_sport:"))
async def sport_chosen(callback: CallbackQuery, state: FSMContext):
    sport = SportType(callback.data.split(":", 1)[1])
    wizard = RegistrationWizard(sport)
    await callback.answer()
    await _ask(callback.message, state, wizard, REGISTRATION_STEPS[1][0])


# === ANSWERS ===

@router.message(StateFilter(*WIZARD_STATES), F.text, ~F.text.startswith("/"))
async def text_answer(message: Message, state: FSMContext, services: Services):
    data = await state.get_data()
    field = data.get("field")
    if not field or field in BOOLEAN_FIELDS:
        await message.answer(t("unknown_input"))
        return
    await _accept(message, state, services, field, message.text.strip())


@router.callback_query(StateFilter(*WIZARD_STATES), F.data.startswith("reg:"))
async def choice_answer(callback: CallbackQuery, state: FSMContext, services: Services):
    _, field, value = callback.data.split(":", 2)
    await callback.answer()

    if field in BOOLEAN_FIELDS:
        value = value == "yes"
    elif field == "how_did_you_hear":
        value = HEAR_ABOUT_OPTIONS[int(value)]
    await _accept(callback.message, state, services, field, value)


@router.callback_query(StateFilter(*WIZARD_STATES), F.data == "reg_skip")
async def skip_answer(callback: CallbackQuery, state: FSMContext, services: Services):
    data = await state.get_data()
    await callback.answer()
    await _accept(callback.message, state, services, data.get("field"), "")


@router.callback_query(StateFilter(*WIZARD_STATES), F.data == "reg_back")
async def step_back(callback: CallbackQuery, state: FSMContext):
    wizard = await _load(state)
    await callback.answer()
    if not wizard:
        return
    wizard.back()
    await _ask(callback.message, state, wizard, REGISTRATION_STEPS[wizard.current_step][0])


@router.callback_query(RegistrationStates.agreement, F.data == "reg_submit")
async def retry_submit(callback: CallbackQuery, state: FSMContext, services: Services):
    wizard = await _load(state)
    await callback.answer()
    if wizard:
        await _submit(callback.message, state, services, wizard)
