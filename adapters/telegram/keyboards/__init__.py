from adapters.telegram.keyboards.inline import (
    get_main_menu_keyboard,
    get_back_to_menu_keyboard,
    get_sports_keyboard,
    get_choice_keyboard,
    get_shirt_size_keyboard,
    get_experience_keyboard,
    get_hear_about_keyboard,
    get_yes_no_keyboard,
    get_skip_keyboard,
    get_wizard_nav_keyboard,
    get_retry_keyboard,
    get_waiver_type_keyboard,
    get_photo_permission_keyboard,
    get_waiver_confirm_keyboard,
    get_subscribe_keyboard,
)

__all__ = [
    "get_main_menu_keyboard",
    "get_back_to_menu_keyboard",
    "get_sports_keyboard",
    "get_choice_keyboard",
    "get_shirt_size_keyboard",
    "get_experience_keyboard",
    "get_hear_about_keyboard",
    "get_yes_no_keyboard",
    "get_skip_keyboard",
    "get_wizard_nav_keyboard",
    "get_retry_keyboard",
    "get_waiver_type_keyboard",
    "get_photo_permission_keyboard",
    "get_waiver_confirm_keyboard",
    "get_subscribe_keyboard",
]
