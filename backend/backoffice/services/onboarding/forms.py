"""
Onboarding form payloads and their field checks.

Form models only coerce types; the user-facing rules live in the
validate_* functions so every failing field gets its own inline message.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from backoffice.services.onboarding.snapshot import Person
from shared.utils.validators import normalize_phone, validate_email, validate_password


# =============================================================================
# Form Models
# =============================================================================


class PersonForm(BaseModel):
    """Personnel step: one team member to create when onboarding finishes."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    password_confirm: str = ""
    role: Literal["manager", "staff"] = "manager"

    @field_validator("first_name", "last_name", "email", "phone", mode="before")
    @classmethod
    def strip_text(cls, v: str | None) -> str:
        return (v or "").strip()


class PaymentForm(BaseModel):
    connected: bool = False
    stripe_account_id: str | None = None


class TablesForm(BaseModel):
    """QR stand step. Section values are comma-separated table numbers."""

    selected_design: str = ""
    table_sections: dict[str, str] = Field(default_factory=dict)
    floor_plans: list[str] = Field(default_factory=list)
    domain: str = ""
    notes: str = ""

    @field_validator("table_sections", mode="before")
    @classmethod
    def stringify_sections(cls, v: dict | None) -> dict[str, str]:
        if not v:
            return {}
        return {str(k): "" if val is None else str(val) for k, val in v.items()}


class ReviewsForm(BaseModel):
    """Either a place id or a full review link (the place id is extracted from it)."""

    place_id: str = ""
    review_link: str = ""


class MessagingForm(BaseModel):
    restaurant_name: str = ""
    group_created: bool = False
    group_link: str = ""


# =============================================================================
# Validation
# =============================================================================


def validate_person(form: PersonForm, personnel: list[Person]) -> dict[str, str]:
    """
    Check a new team member against the form rules and the current list.

    Returns:
        Error messages keyed by field (empty when the person can be added).
    """
    errors: dict[str, str] = {}

    if not form.first_name:
        errors["first_name"] = "First name is required"
    if not form.last_name:
        errors["last_name"] = "Last name is required"

    try:
        email = validate_email(form.email)
    except ValueError as e:
        errors["email"] = str(e)
    else:
        if any(p.email.lower() == email.lower() for p in personnel):
            errors["email"] = "This email is already in use"

    try:
        validate_password(form.password, form.password_confirm)
    except ValueError as e:
        errors["password"] = str(e)

    phone = normalize_phone(form.phone)
    if phone and any(normalize_phone(p.phone) == phone for p in personnel):
        errors["phone"] = "This phone number is already in use"

    return errors
