"""
Waiver service - digital signature validation and submission.

A participant signs each waiver type once; signing again with the same
name, date of birth and type refreshes the existing record instead of
creating a duplicate.
"""

import logging
import string
import time
from datetime import date, datetime, timezone
from typing import Optional, List, Dict

import httpx
from postgrest.exceptions import APIError

from core.domain.models import (
    WaiverType, PhotoPermission, WaiverSignature, WaiverSignatureData,
    WaiverSubmissionResult, ClientInfo,
)
from core.domain.constants import WAIVER_VERSION, CONFIRMATION_PREFIX, CONFIRMATION_ID_CHARS
from core.interfaces.repositories import IWaiverRepository
from core.utils.validation import is_full_name, is_adult

logger = logging.getLogger(__name__)

SUMMARY_ERROR = "Please fill in all required fields and check all acknowledgment boxes."

BASE36_DIGITS = string.digits + string.ascii_lowercase


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_confirmation_number(waiver_id: str, now_ms: Optional[int] = None) -> str:
    """OSL-<base36 ms timestamp>-<last id chars>, upper-cased"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    stamp = to_base36(now_ms).upper()
    suffix = str(waiver_id)[-CONFIRMATION_ID_CHARS:].upper()
    return f"{CONFIRMATION_PREFIX}-{stamp}-{suffix}"


def apply_photo_permission(data: WaiverSignatureData) -> WaiverSignatureData:
    """Photo release records the grant/withhold choice as acknowledge_terms"""
    if data.waiver_type != WaiverType.PHOTO_RELEASE or data.photo_permission is None:
        return data
    return data.model_copy(update={
        "acknowledge_terms": data.photo_permission == PhotoPermission.GRANT,
    })


def validate_waiver(data: WaiverSignatureData, today: Optional[date] = None) -> Dict[str, str]:
    """Field errors for a waiver form. Empty dict means valid."""
    errors: Dict[str, str] = {}
    name = data.participant_name.strip()
    signature = data.digital_signature.strip()

    if not name:
        errors["participant_name"] = "Participant name is required"
    elif not is_full_name(name):
        errors["participant_name"] = "Please enter your full name (first and last name)"

    if not data.participant_dob:
        errors["participant_dob"] = "Date of birth is required"
    elif not is_adult(data.participant_dob, today):
        errors["participant_dob"] = "Participant must be at least 18 years old"

    if not signature:
        errors["digital_signature"] = "Digital signature is required"
    elif signature != name:
        errors["digital_signature"] = (
            "Digital signature must match participant name exactly (including capitalization)"
        )
    elif not is_full_name(signature):
        errors["digital_signature"] = (
            "Digital signature must be your full legal name (first and last name)"
        )

    if data.waiver_type == WaiverType.PHOTO_RELEASE:
        if data.photo_permission is None:
            errors["photo_permission"] = "You must select either grant or withhold permission"
    elif not data.acknowledge_terms:
        errors["acknowledge_terms"] = "You must acknowledge the terms"

    if not data.voluntary_signature:
        errors["voluntary_signature"] = "You must confirm voluntary signature"

    if not data.legal_age_certification:
        errors["legal_age_certification"] = "You must certify legal age or guardian authority"

    return errors


class WaiverService:
    """Service for waiver signatures"""

    def __init__(self, waiver_repo: IWaiverRepository):
        self.waiver_repo = waiver_repo

    async def submit_waiver(
        self,
        data: WaiverSignatureData,
        client_info: Optional[ClientInfo] = None,
        today: Optional[date] = None,
    ) -> WaiverSubmissionResult:
        """
        Validate, then insert or refresh the signature and read it back.
        Database failures are reported in the result, never raised.
        """
        data = apply_photo_permission(data)
        errors = validate_waiver(data, today)
        if errors:
            return WaiverSubmissionResult(success=False, message=SUMMARY_ERROR, errors=errors)

        client_info = client_info or ClientInfo()
        name = data.participant_name.strip()
        signed = {
            "waiver_version": WAIVER_VERSION,
            "digital_signature": data.digital_signature.strip(),
            "acknowledge_terms": data.acknowledge_terms,
            "voluntary_signature": data.voluntary_signature,
            "legal_age_certification": data.legal_age_certification,
            "ip_address": client_info.ip_address,
            "user_agent": client_info.user_agent,
            "signature_timestamp": datetime.now(timezone.utc).isoformat(),
        }

        try:
            existing = await self.waiver_repo.find_existing(name, data.participant_dob, data.waiver_type)
            if existing:
                # name, dob and type identify the record and stay as-is
                logger.info(f"[WAIVER] Refreshing existing {data.waiver_type.value} waiver {existing.id}")
                record = await self.waiver_repo.update(existing.id, signed)
                action = "updated"
            else:
                record = await self.waiver_repo.create({
                    "waiver_type": data.waiver_type.value,
                    "participant_name": name,
                    "participant_dob": data.participant_dob.isoformat(),
                    **signed,
                })
                action = "submitted"

            verified = await self.waiver_repo.get_by_id(record.id) if record else None
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"[WAIVER] Database error for {data.waiver_type.value} waiver: {e}")
            return WaiverSubmissionResult(
                success=False,
                message="Failed to submit waiver. Please try again or contact support.",
            )

        if not verified:
            logger.error(f"[WAIVER] Write could not be verified for {data.waiver_type.value} waiver")
            return WaiverSubmissionResult(
                success=False,
                message="Failed to verify waiver submission. Please try again.",
            )

        confirmation = generate_confirmation_number(str(verified.id))
        logger.info(f"[WAIVER] Waiver {action}: {verified.id} ({confirmation})")
        return WaiverSubmissionResult(
            success=True,
            message=f"Waiver {action} successfully!",
            id=verified.id,
            confirmation_number=confirmation,
        )

    async def has_signed_waiver(self, participant_name: str, participant_dob: date,
                                waiver_type: WaiverType) -> bool:
        existing = await self.waiver_repo.find_existing(
            participant_name.strip(), participant_dob, waiver_type
        )
        return existing is not None

    async def get_participant_waivers(self, participant_name: str,
                                      participant_dob: date) -> List[WaiverSignature]:
        return await self.waiver_repo.list_for_participant(participant_name.strip(), participant_dob)

    async def list_waivers(self, waiver_type: Optional[WaiverType] = None) -> List[WaiverSignature]:
        return await self.waiver_repo.list(waiver_type)
