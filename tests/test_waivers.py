"""Tests for core/services/waiver_service.py"""

import re
from datetime import date

import httpx

from core.domain.models import WaiverType, PhotoPermission, WaiverSignatureData, ClientInfo
from core.services.waiver_service import (
    validate_waiver, generate_confirmation_number, apply_photo_permission, to_base36,
)

TODAY = date(2025, 6, 1)


def liability(**overrides):
    fields = {
        "waiver_type": WaiverType.LIABILITY,
        "participant_name": "Morgan Diaz",
        "participant_dob": date(1990, 4, 12),
        "digital_signature": "Morgan Diaz",
        "acknowledge_terms": True,
        "voluntary_signature": True,
        "legal_age_certification": True,
    }
    fields.update(overrides)
    return WaiverSignatureData(**fields)


def photo_release(permission="grant", **overrides):
    return liability(waiver_type="photo", acknowledge_terms=False,
                     photo_permission=permission, **overrides)


class TestValidateWaiver:

    def test_valid_liability(self):
        assert validate_waiver(liability(), TODAY) == {}

    def test_full_name_required(self):
        errors = validate_waiver(liability(participant_name="Morgan", digital_signature="Morgan"), TODAY)
        assert errors["participant_name"] == "Please enter your full name (first and last name)"

    def test_signature_must_match_exactly(self):
        errors = validate_waiver(liability(digital_signature="morgan diaz"), TODAY)
        assert errors == {
            "digital_signature": (
                "Digital signature must match participant name exactly (including capitalization)"
            ),
        }

    def test_must_be_eighteen(self):
        errors = validate_waiver(liability(participant_dob=date(2007, 6, 2)), TODAY)
        assert errors["participant_dob"] == "Participant must be at least 18 years old"
        assert validate_waiver(liability(participant_dob=date(2007, 6, 1)), TODAY) == {}

    def test_missing_fields(self):
        errors = validate_waiver(WaiverSignatureData(waiver_type="liability", participant_dob=""), TODAY)
        assert errors["participant_name"] == "Participant name is required"
        assert errors["participant_dob"] == "Date of birth is required"
        assert errors["digital_signature"] == "Digital signature is required"
        assert errors["acknowledge_terms"] == "You must acknowledge the terms"
        assert errors["voluntary_signature"] == "You must confirm voluntary signature"
        assert errors["legal_age_certification"] == "You must certify legal age or guardian authority"

    def test_photo_release_needs_a_choice(self):
        errors = validate_waiver(photo_release(permission=None), TODAY)
        assert errors == {"photo_permission": "You must select either grant or withhold permission"}


class TestPhotoPermission:

    def test_short_type_alias(self):
        assert photo_release().waiver_type == WaiverType.PHOTO_RELEASE

    def test_grant_recorded_as_acknowledged(self):
        assert apply_photo_permission(photo_release("grant")).acknowledge_terms is True

    def test_withhold_recorded_as_not_acknowledged(self):
        data = photo_release("withhold")
        assert data.photo_permission == PhotoPermission.WITHHOLD
        assert apply_photo_permission(data).acknowledge_terms is False

    def test_liability_untouched(self):
        data = liability()
        assert apply_photo_permission(data) is data


class TestConfirmationNumber:

    def test_format(self):
        number = generate_confirmation_number("3f2c9a4e-0000-4000-8000-00000ab12cde", now_ms=1720000000000)
        assert number == f"OSL-{to_base36(1720000000000).upper()}-B12CDE"

    def test_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"


class TestSubmitWaiver:

    async def test_new_signature(self, services, db):
        result = await services.waivers.submit_waiver(
            liability(), ClientInfo(ip_address="203.0.113.9", user_agent="Mozilla/5.0"), today=TODAY,
        )

        assert result.success
        assert result.message == "Waiver submitted successfully!"
        assert re.fullmatch(r"OSL-[0-9A-Z]+-[0-9A-F]{6}", result.confirmation_number)
        row = db.rows("waiver_signatures")[0]
        assert row["participant_dob"] == "1990-04-12"
        assert row["waiver_version"] == "1.0"
        assert row["ip_address"] == "203.0.113.9"

    async def test_signing_again_refreshes_record(self, services, db):
        first = await services.waivers.submit_waiver(liability(), today=TODAY)
        second = await services.waivers.submit_waiver(
            liability(), ClientInfo(user_agent="telegram-bot/42"), today=TODAY,
        )

        assert second.success
        assert second.message == "Waiver updated successfully!"
        assert second.id == first.id
        assert len(db.rows("waiver_signatures")) == 1
        assert db.rows("waiver_signatures")[0]["user_agent"] == "telegram-bot/42"

    async def test_each_type_signed_separately(self, services, db):
        await services.waivers.submit_waiver(liability(), today=TODAY)
        await services.waivers.submit_waiver(photo_release(), today=TODAY)

        waivers = await services.waivers.get_participant_waivers("Morgan Diaz", date(1990, 4, 12))
        assert {w.waiver_type for w in waivers} == {WaiverType.LIABILITY, WaiverType.PHOTO_RELEASE}
        assert len(await services.waivers.list_waivers(WaiverType.PHOTO_RELEASE)) == 1
        assert await services.waivers.has_signed_waiver(" Morgan Diaz ", date(1990, 4, 12), WaiverType.LIABILITY)

    async def test_invalid_form_not_stored(self, services, db):
        result = await services.waivers.submit_waiver(liability(voluntary_signature=False), today=TODAY)
        assert not result.success
        assert result.message == "Please fill in all required fields and check all acknowledgment boxes."
        assert db.rows("waiver_signatures") == []

    async def test_database_failure_reported(self, services, db):
        db.fail_next("waiver_signatures", code="08006", message="connection failure")
        result = await services.waivers.submit_waiver(liability(), today=TODAY)
        assert not result.success
        assert result.message == "Failed to submit waiver. Please try again or contact support."

    async def test_network_failure_reported(self, services, db):
        db.failures["waiver_signatures"] = httpx.ConnectError("unreachable")
        result = await services.waivers.submit_waiver(liability(), today=TODAY)
        assert not result.success
        assert result.confirmation_number is None

    async def test_unverified_write_reported(self, services, db, monkeypatch):
        async def row_vanished(waiver_id):
            return None

        monkeypatch.setattr(services.waivers.waiver_repo, "get_by_id", row_vanished)
        result = await services.waivers.submit_waiver(liability(), today=TODAY)

        assert not result.success
        assert result.message == "Failed to verify waiver submission. Please try again."
        assert result.id is None
        assert result.confirmation_number is None
        # the insert itself went through
        assert len(db.rows("waiver_signatures")) == 1
