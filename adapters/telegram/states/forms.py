"""
FSM states for Telegram bot forms.
"""

from aiogram.fsm.state import State, StatesGroup


class RegistrationStates(StatesGroup):
    """Player registration, one state per wizard step"""
    choosing_sport = State()
    contact = State()       # step 1
    details = State()       # step 2
    experience = State()    # step 3
    agreement = State()     # step 4


class SubstituteStates(StatesGroup):
    """Substitute pool sign-up"""
    choosing_sport = State()
    first_name = State()
    last_name = State()
    preferred_pronouns = State()
    phone = State()
    emergency_contact_name = State()
    emergency_contact_phone = State()
    agreements = State()


class WaiverStates(StatesGroup):
    """Waiver signing: type -> name -> dob -> signature -> acknowledgments"""
    choosing_type = State()
    name = State()
    dob = State()
    signature = State()
    photo_permission = State()
    acknowledgments = State()
