"""
Registration service - player sign-up wizard and substitute pool.

The wizard is a plain state holder so any surface (HTTP, Telegram FSM)
can drive it step by step and persist it between requests.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from uuid import UUID

from postgrest.exceptions import APIError

from core.domain.models import (
    SportType, ShirtSize, ExperienceLevel, RegistrationStatus,
    PlayerRegistration, PlayerRegistrationCreate, SubstituteRegistration, SubstituteRegistrationCreate,
    RegistrationSummary, RegistrationResult,
)
from core.domain.constants import (
    SPORTS, MAX_NAME_LENGTH, REGISTRATION_TOTAL_STEPS, REGISTRATION_STEPS,
    SUBSTITUTE_NOTES, SUBSTITUTE_DEFAULT_AGE,
)
from core.interfaces.repositories import IRegistrationRepository
from core.utils.validation import (
    is_valid_email, is_valid_name, is_valid_phone, format_phone, blank_to_none,
)
from infrastructure.database.errors import parse_database_error

logger = logging.getLogger(__name__)

SHIRT_SIZE_VALUES = {s.value for s in ShirtSize}
EXPERIENCE_VALUES = {e.value for e in ExperienceLevel}


def _text(draft: Dict[str, Any], field: str) -> str:
    value = draft.get(field)
    return value.strip() if isinstance(value, str) else ""


def _check_name(errors: Dict[str, str], draft: Dict[str, Any], field: str, label: str):
    value = _text(draft, field)
    if not value:
        errors[field] = f"{label} is required"
    elif not is_valid_name(value):
        errors[field] = f"{label} must be {MAX_NAME_LENGTH} characters or fewer"


def validate_step(draft: Dict[str, Any], step: int) -> Dict[str, str]:
    """
    Validate one wizard step.
    Returns {field: message}; empty dict means the step is complete.
    """
    if step not in REGISTRATION_STEPS:
        raise ValueError(f"Unknown registration step: {step}")

    errors: Dict[str, str] = {}

    if step == 1:
        _check_name(errors, draft, "first_name", "First name")
        _check_name(errors, draft, "last_name", "Last name")
        email = _text(draft, "email")
        if not email:
            errors["email"] = "Email is required"
        elif not is_valid_email(email):
            errors["email"] = "Please enter a valid email address"
        phone = _text(draft, "phone")
        if not phone:
            errors["phone"] = "Phone number is required"
        elif not is_valid_phone(phone):
            errors["phone"] = "Please enter a valid 10-digit phone number."

    elif step == 2:
        _check_name(errors, draft, "emergency_contact_name", "Emergency contact name")
        phone = _text(draft, "emergency_contact_phone")
        if not phone:
            errors["emergency_contact_phone"] = "Emergency contact phone is required"
        elif not is_valid_phone(phone):
            errors["emergency_contact_phone"] = "Please enter a valid 10-digit emergency contact phone number."
        size = _text(draft, "shirt_size")
        if not size:
            errors["shirt_size"] = "Shirt size is required"
        elif size not in SHIRT_SIZE_VALUES:
            errors["shirt_size"] = "Please choose a valid shirt size"

    elif step == 3:
        level = _text(draft, "experience_level")
        if not level:
            errors["experience_level"] = "Experience level is required"
        elif level not in EXPERIENCE_VALUES:
            errors["experience_level"] = "Please choose a valid experience level"

    elif step == 4:
        if draft.get("agree_to_terms") is not True:
            errors["agree_to_terms"] = "Please agree to the terms and conditions to continue."

    return errors


def validate_all_steps(draft: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for step in REGISTRATION_STEPS:
        errors.update(validate_step(draft, step))
    return errors


class RegistrationWizard:
    """Step-by-step player registration draft"""

    total_steps = REGISTRATION_TOTAL_STEPS

    def __init__(self, sport: SportType, draft: Optional[Dict[str, Any]] = None,
                 current_step: int = 1):
        self.sport = sport
        self.draft: Dict[str, Any] = {
            "shirt_size": ShirtSize.M.value,
            "experience_level": ExperienceLevel.BEGINNER.value,
            "agree_to_terms": False,
            "agree_to_email_updates": True,
        }
        self.draft.update(draft or {})
        self.current_step = min(max(current_step, 1), self.total_steps)
        self.errors: Dict[str, str] = {}

    def update(self, **fields) -> None:
        self.draft.update(fields)
        for field in fields:
            self.errors.pop(field, None)

    def next(self) -> bool:
        """Advance when the current step is valid. Returns True if it moved"""
        self.errors = validate_step(self.draft, self.current_step)
        if self.errors:
            return False
        if self.current_step < self.total_steps:
            self.current_step += 1
            return True
        return False

    def back(self) -> None:
        self.current_step = max(self.current_step - 1, 1)
        self.errors = {}

    @property
    def progress(self) -> float:
        return self.current_step / self.total_steps * 100

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.total_steps

    @property
    def is_complete(self) -> bool:
        return not validate_all_steps(self.draft)

    def to_dict(self) -> dict:
        return {
            "sport": self.sport.value,
            "current_step": self.current_step,
            "draft": dict(self.draft),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RegistrationWizard":
        return cls(
            sport=SportType(data["sport"]),
            draft=data.get("draft") or {},
            current_step=data.get("current_step", 1),
        )


class RegistrationService:
    """Service for player and substitute registrations"""

    def __init__(self, registration_repo: IRegistrationRepository):
        self.registration_repo = registration_repo

    async def submit_player_registration(self, sport: SportType,
                                         draft: Dict[str, Any]) -> RegistrationResult:
        errors = validate_all_steps(draft)
        if errors:
            return RegistrationResult(
                success=False,
                message="Please fill in all required fields to continue.",
                errors=errors,
            )

        form = PlayerRegistrationCreate(
            sport_type=sport,
            first_name=_text(draft, "first_name"),
            last_name=_text(draft, "last_name"),
            email=_text(draft, "email").lower(),
            phone=format_phone(draft.get("phone")),
            shirt_size=_text(draft, "shirt_size"),
            emergency_contact_name=_text(draft, "emergency_contact_name"),
            emergency_contact_phone=format_phone(draft.get("emergency_contact_phone")),
            experience_level=_text(draft, "experience_level"),
            how_did_you_hear=_text(draft, "how_did_you_hear"),
            dietary_restrictions=blank_to_none(draft.get("dietary_restrictions")),
            medical_conditions=blank_to_none(draft.get("medical_conditions")),
            agree_to_terms=True,
            agree_to_email_updates=bool(draft.get("agree_to_email_updates")),
        )
        data = form.model_dump(mode="json")
        data["status"] = RegistrationStatus.PENDING.value
        data["registration_date"] = datetime.now(timezone.utc).isoformat()

        try:
            registration = await self.registration_repo.create_player_registration(data)
        except APIError as e:
            logger.error(f"[REGISTRATION] Insert failed for {data['email']}: {e}")
            return RegistrationResult(success=False, message=parse_database_error(e))

        label = SPORTS[sport.value]["label"]
        logger.info(f"[REGISTRATION] New {sport.value} registration {registration.id}")
        return RegistrationResult(
            success=True,
            message=f"Welcome to the {label} League! We'll be in touch soon.",
            id=registration.id,
        )

    def validate_substitute(self, form: SubstituteRegistrationCreate) -> Dict[str, str]:
        """Checks run in the same order the form shows them"""
        errors: Dict[str, str] = {}
        if not form.first_name.strip():
            errors["first_name"] = "First name is required"
        if not form.last_name.strip():
            errors["last_name"] = "Last name is required"
        if not form.agree_to_liability_waiver:
            errors["agree_to_liability_waiver"] = "You must agree to submit the liability waiver to participate."
        if not form.agree_to_photo_release:
            errors["agree_to_photo_release"] = "You must agree to submit the photo release waiver to participate."
        if not form.agree_to_text_updates:
            errors["agree_to_text_updates"] = (
                "You must agree to receive text messages so we can contact you when teams need substitutes."
            )
        if not form.confirm_age_18_plus:
            errors["confirm_age_18_plus"] = "You must confirm that you are 18 or older to participate."
        if not is_valid_phone(form.phone):
            errors["phone"] = "Please enter a valid 10-digit phone number."
        if not is_valid_phone(form.emergency_contact_phone):
            errors["emergency_contact_phone"] = "Please enter a valid 10-digit emergency contact phone number."
        return errors

    async def submit_substitute_registration(
        self, sport: SportType, form: SubstituteRegistrationCreate
    ) -> RegistrationResult:
        errors = self.validate_substitute(form)
        if errors:
            # first message is what the user sees
            return RegistrationResult(
                success=False,
                message=next(iter(errors.values())),
                errors=errors,
            )

        data = {
            "sport_type": sport.value,
            "first_name": form.first_name.strip(),
            "last_name": form.last_name.strip(),
            "preferred_pronouns": form.preferred_pronouns.strip(),
            "age": SUBSTITUTE_DEFAULT_AGE,
            "phone": format_phone(form.phone),
            "emergency_contact_name": form.emergency_contact_name.strip(),
            "emergency_contact_phone": format_phone(form.emergency_contact_phone),
            "notes": SUBSTITUTE_NOTES,
            "agree_to_terms": True,
            "agree_to_text_updates": form.agree_to_text_updates,
            "registration_date": datetime.now(timezone.utc).isoformat(),
        }

        try:
            registration = await self.registration_repo.create_substitute_registration(data)
        except APIError as e:
            logger.error(f"[REGISTRATION] Substitute insert failed: {e}")
            return RegistrationResult(success=False, message=parse_database_error(e))

        label = SPORTS[sport.value]["label"]
        logger.info(f"[REGISTRATION] New {sport.value} substitute {registration.id}")
        return RegistrationResult(
            success=True,
            message=f"Welcome to the {label} substitute pool! We'll contact you when teams need subs.",
            id=registration.id,
        )

    # === Admin ===

    async def list_registrations(
        self,
        sport: Optional[SportType] = None,
        status: Optional[RegistrationStatus] = None,
    ) -> List[PlayerRegistration]:
        return await self.registration_repo.list_player_registrations(sport, status)

    async def update_registration_status(
        self,
        registration_id: UUID,
        status: RegistrationStatus,
        notes: Optional[str] = None,
    ) -> Optional[PlayerRegistration]:
        data: Dict[str, Any] = {"status": status.value}
        if notes is not None:
            data["notes"] = notes
        registration = await self.registration_repo.update_player_registration(registration_id, data)
        if registration:
            logger.info(f"[REGISTRATION] {registration_id} -> {status.value}")
        return registration

    async def get_summary(self) -> List[RegistrationSummary]:
        """Counts per sport and status"""
        registrations = await self.registration_repo.list_player_registrations()
        summaries = []
        for sport in SportType:
            counts = Counter(r.status.value for r in registrations if r.sport_type == sport)
            summaries.append(RegistrationSummary(
                sport_type=sport,
                total=sum(counts.values()),
                by_status={s.value: counts.get(s.value, 0) for s in RegistrationStatus},
            ))
        return summaries

    async def list_substitutes(self, sport: Optional[SportType] = None) -> List[SubstituteRegistration]:
        return await self.registration_repo.list_substitute_registrations(sport)
