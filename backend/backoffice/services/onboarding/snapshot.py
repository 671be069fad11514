"""
Onboarding snapshot: the persisted state of one restaurant's wizard.

The snapshot is a versioned record stored as JSON under
`onboarding_<restaurantId>`. Per-step slices hold the form data; the
completed-steps list is derived data and is re-validated on every load.

Version 1 is the camelCase shape written by the previous browser-side wizard
(personnelData, stripeData, qrStandData, ...). migrate_snapshot() lifts it to
the current version before validation.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from shared.config.constants import DEFAULT_TABLE_SECTIONS, TeamRole
from shared.utils.validators import extract_place_id, parse_table_numbers

SNAPSHOT_VERSION = 2

# Accept both snake_case and the legacy camelCase keys
SLICE_CONFIG = {"populate_by_name": True, "alias_generator": to_camel}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def default_table_sections() -> dict[str, str]:
    return {name: "" for name in DEFAULT_TABLE_SECTIONS}


# =============================================================================
# Step slices
# =============================================================================


class Person(BaseModel):
    """A team member collected in the personnel step (not yet created upstream)."""
    model_config = SLICE_CONFIG

    id: int | str
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    password: str = ""
    role: Literal["manager", "staff"] = "manager"

    @property
    def is_manager(self) -> bool:
        return self.role == TeamRole.MANAGER

    def to_backend(self) -> dict[str, Any]:
        """Payload for the backend's personnel/team endpoints."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone or None,
            "password": self.password,
            "role": self.role,
        }


class PaymentLink(BaseModel):
    model_config = SLICE_CONFIG

    connected: bool = False
    stripe_account_id: str | None = None


class PosSetup(BaseModel):
    model_config = SLICE_CONFIG

    pos_type: str = ""
    username: str = ""
    password: str = ""
    base_url: str = ""
    environment: str = "production"
    is_active: bool = True
    # Provider fields the base URL is derived from
    port: str = ""
    ip: str = ""
    database: str = ""


class TableSetup(BaseModel):
    """QR stand / table configuration. Section values are comma-separated table numbers."""
    model_config = SLICE_CONFIG

    selected_design: str = ""
    table_count: str = ""
    table_sections: dict[str, str] = Field(default_factory=default_table_sections)
    floor_plans: list[Any] = Field(default_factory=list)
    domain: str = ""
    notes: str = ""
    is_configured: bool = False

    def table_numbers(self) -> dict[str, list[int]]:
        """Valid table numbers per section (sections without any are left out)."""
        result: dict[str, list[int]] = {}
        for section, raw in self.table_sections.items():
            numbers = parse_table_numbers(raw)
            if numbers:
                result[section] = numbers
        return result

    @property
    def total_tables(self) -> int:
        return sum(len(n) for n in self.table_numbers().values())

    @property
    def has_valid_table(self) -> bool:
        return self.total_tables > 0


class ReviewLink(BaseModel):
    model_config = SLICE_CONFIG

    review_link: str = ""
    place_id: str = ""
    is_configured: bool = False


class MessagingGroup(BaseModel):
    model_config = SLICE_CONFIG

    restaurant_name: str = ""
    group_created: bool = False
    group_link: str = ""
    is_configured: bool = False


class StepEvent(BaseModel):
    """One entry of the append-only step history."""
    step: int
    action: Literal["visited", "completed", "skipped", "reopened", "edited"]
    at: datetime = Field(default_factory=utcnow)


# =============================================================================
# Snapshot
# =============================================================================


class OnboardingSnapshot(BaseModel):
    model_config = SLICE_CONFIG

    version: int = SNAPSHOT_VERSION
    restaurant_id: int | None = None
    personnel: list[Person] = Field(default_factory=list)
    payment: PaymentLink = Field(default_factory=PaymentLink)
    pos: PosSetup = Field(default_factory=PosSetup)
    tables: TableSetup = Field(default_factory=TableSetup)
    reviews: ReviewLink = Field(default_factory=ReviewLink)
    messaging: MessagingGroup = Field(default_factory=MessagingGroup)
    completed_steps: list[int] = Field(default_factory=list)
    current_step: int = 0
    history: list[StepEvent] = Field(default_factory=list)
    saved_at: datetime | None = None

    @property
    def managers(self) -> list[Person]:
        return [p for p in self.personnel if p.is_manager]

    def record(self, step: int, action: str) -> None:
        self.history.append(StepEvent(step=step, action=action))

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: str | dict[str, Any]) -> "OnboardingSnapshot":
        data = json.loads(raw) if isinstance(raw, str) else raw
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot must be a JSON object, got {type(data).__name__}")
        return cls.model_validate(migrate_snapshot(dict(data)))

    def public_dict(self) -> dict[str, Any]:
        """Snapshot for API responses: passwords are never echoed back."""
        data = self.model_dump(mode="json")
        for person in data["personnel"]:
            person.pop("password", None)
        data["pos"].pop("password", None)
        return data


# =============================================================================
# Legacy migration
# =============================================================================

LEGACY_KEYS = {
    "personnelData": "personnel",
    "stripeData": "payment",
    "posData": "pos",
    "qrStandData": "tables",
    "googleReviewData": "reviews",
    "telegramData": "messaging",
    "completedSteps": "completed_steps",
    "currentStep": "current_step",
    "savedAt": "saved_at",
}


def migrate_snapshot(data: dict[str, Any]) -> dict[str, Any]:
    """
    Lift a stored snapshot to SNAPSHOT_VERSION.

    Version 1 fix-ups:
        - top-level camelCase keys renamed
        - missing table sections filled with the default section names
        - single `floorPlan` converted to the `floorPlans` list
        - place id extracted from the review link when absent
    """
    version = data.get("version", 1)
    if isinstance(version, int) and version >= SNAPSHOT_VERSION:
        return data

    migrated = {LEGACY_KEYS.get(k, k): v for k, v in data.items()}

    tables = dict(migrated.get("tables") or {})
    if not tables.get("tableSections") and not tables.get("table_sections"):
        tables["tableSections"] = default_table_sections()
    if tables.get("floorPlan") and not tables.get("floorPlans"):
        tables["floorPlans"] = [tables["floorPlan"]]
    tables.pop("floorPlan", None)
    if not tables.get("floorPlans") and not tables.get("floor_plans"):
        tables["floorPlans"] = []
    # Legacy inputs stored numbers or empty strings
    sections = tables.get("tableSections") or tables.get("table_sections") or {}
    tables["tableSections"] = {k: "" if v is None else str(v) for k, v in sections.items()}
    tables.pop("table_sections", None)
    migrated["tables"] = tables

    reviews = dict(migrated.get("reviews") or {})
    if not reviews.get("placeId") and reviews.get("reviewLink"):
        reviews["placeId"] = extract_place_id(reviews["reviewLink"])
    migrated["reviews"] = reviews

    # Legacy personnel entries kept the form's confirmation field
    migrated["personnel"] = [
        {k: v for k, v in p.items() if k != "passwordConfirm"}
        for p in migrated.get("personnel") or []
        if isinstance(p, dict)
    ]

    migrated["version"] = SNAPSHOT_VERSION
    return migrated
