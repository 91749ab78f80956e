"""Tests for core/utils/validation.py"""

from datetime import date

from core.utils.validation import (
    phone_digits, is_valid_phone, format_phone, is_valid_email, is_valid_name,
    is_full_name, calculate_age, is_adult, blank_to_none,
)


class TestPhone:

    def test_digits_only(self):
        assert phone_digits("(415) 555-0134") == "4155550134"
        assert phone_digits(None) == ""

    def test_ten_digits_required(self):
        assert is_valid_phone("415.555.0134")
        assert not is_valid_phone("555-0134")
        assert not is_valid_phone("1-415-555-0134")

    def test_format_while_typing(self):
        assert format_phone("415") == "415"
        assert format_phone("41555") == "415-55"
        assert format_phone("4155550134") == "415-555-0134"
        assert format_phone("415555013499") == "415-555-0134"


class TestNamesAndEmail:

    def test_email(self):
        assert is_valid_email(" sam@example.org ")
        assert not is_valid_email("sam@example")
        assert not is_valid_email("")
        assert not is_valid_email(None)

    def test_name_length(self):
        assert is_valid_name("Sam")
        assert not is_valid_name("   ")
        assert not is_valid_name("x" * 51)

    def test_full_name(self):
        assert is_full_name("Sam Chen")
        assert not is_full_name("Sam")

    def test_blank_to_none(self):
        assert blank_to_none("  ") is None
        assert blank_to_none(None) is None
        assert blank_to_none(" peanuts ") == "peanuts"


class TestAge:

    def test_birthday_boundary(self):
        today = date(2025, 6, 1)
        assert calculate_age(date(2000, 6, 1), today) == 25
        assert calculate_age(date(2000, 6, 2), today) == 24

    def test_adult(self):
        today = date(2025, 6, 1)
        assert is_adult(date(2007, 6, 1), today)
        assert not is_adult(date(2007, 6, 2), today)
