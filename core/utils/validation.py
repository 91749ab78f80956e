"""
Field validators and formatters shared by the registration and waiver forms.

Used by services, the HTTP API and the Telegram FSM handlers, so every
surface applies the same rules.
"""

import re
from datetime import date
from typing import Optional

from core.domain.constants import (
    MIN_NAME_LENGTH,
    MAX_NAME_LENGTH,
    PHONE_DIGITS,
    MIN_PARTICIPANT_AGE,
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def phone_digits(value: Optional[str]) -> str:
    """Strip everything except digits"""
    return re.sub(r"\D", "", value or "")


def is_valid_phone(value: Optional[str]) -> bool:
    return len(phone_digits(value)) == PHONE_DIGITS


def format_phone(value: Optional[str]) -> str:
    """
    Format as XXX-XXX-XXXX while typing.
    Extra digits beyond ten are dropped, partial input stays partial.
    """
    digits = phone_digits(value)[:PHONE_DIGITS]
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"{digits[:3]}-{digits[3:]}"
    return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"


def is_valid_email(value: Optional[str]) -> bool:
    return bool(value) and bool(EMAIL_RE.match(value.strip()))


def is_valid_name(value: Optional[str]) -> bool:
    name = (value or "").strip()
    return MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH


def is_full_name(value: Optional[str]) -> bool:
    """At least a first and a last name"""
    return len((value or "").strip().split()) >= 2


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """Age in whole years, counted on birthday boundaries"""
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def is_adult(birth_date: date, today: Optional[date] = None) -> bool:
    return calculate_age(birth_date, today) >= MIN_PARTICIPANT_AGE


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
