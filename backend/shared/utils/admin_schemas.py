"""
Pydantic schemas for the super-admin screens.

Backend records are mirrored as-is (unknown fields are ignored). Request
bodies are the form payloads the back-office accepts before forwarding them.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field, field_validator

from shared.config.constants import Limits


# =============================================================================
# Auth Schemas
# =============================================================================


class LoginForm(BaseModel):
    username: str
    password: str
    remember_me: bool = False


class LoginResult(BaseModel):
    access_token: str
    token_type: str = "bearer"


class CurrentUser(BaseModel):
    id: int | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_super_admin: bool = False


# =============================================================================
# Restaurant Schemas
# =============================================================================


class RestaurantListItem(BaseModel):
    id: int
    name: str
    address: str | None = None
    city: str | None = None
    contact_email: str | None = None
    logo_url: str | None = None
    is_active: bool = True
    status: str | None = None
    created_at: datetime | None = None
    total_orders: int = 0
    revenue: str | float | None = None
    pos_connected: bool = False
    onboarding_completed: bool = False


class RestaurantDetail(RestaurantListItem):
    postal_code: str | None = None
    country: str | None = None
    contact_phone: str | None = None
    website: str | None = None
    banner_url: str | None = None
    stripe_account_id: str | None = None
    service_fee_amount: float | None = None
    service_fee_type: str | None = None
    kvk_number: str | None = None
    vat_number: str | None = None
    google_place_id: str | None = None
    deleted: bool = False

    @property
    def is_locked(self) -> bool:
        """Archived or deleted restaurants cannot be edited through onboarding."""
        return self.deleted or not self.is_active


class RestaurantList(BaseModel):
    restaurants: list[RestaurantListItem] = []
    total: int = 0


class RestaurantStats(BaseModel):
    total_partners: int = 0
    setup_required: int = 0
    archived: int = 0
    total_all: int = 0


class RestaurantCreate(BaseModel):
    name: str = Field(min_length=1)
    address: str
    city: str
    postal_code: str
    country: str | None = None
    contact_email: str
    contact_phone: str | None = None
    website: str | None = None


class RestaurantUpdate(BaseModel):
    name: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    website: str | None = None
    service_fee_amount: float | None = None
    service_fee_type: Literal["fixed", "percentage"] | None = None
    kvk_number: str | None = None
    vat_number: str | None = None


class RestaurantDeleteRequest(BaseModel):
    """Typed confirmation plus the offboarding checklist."""
    confirmation_text: str
    owner_talked: bool = False
    qr_returned: bool = False
    payments_settled: bool = False


# =============================================================================
# Team Schemas
# =============================================================================


class TeamMember(BaseModel):
    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    is_restaurant_admin: bool = False
    is_restaurant_staff: bool = False
    is_active: bool = True
    restaurant_id: int | None = None
    created_at: datetime | None = None
    last_login_at: datetime | None = None
    full_name: str | None = None
    role: str | None = None

    @computed_field
    @property
    def role_conflict(self) -> bool:
        """True when both or neither role flag is set."""
        return self.is_restaurant_admin == self.is_restaurant_staff


class TeamList(BaseModel):
    restaurant_name: str | None = None
    team: list[TeamMember] = []
    total: int = 0
    admin_count: int = 0
    staff_count: int = 0
    active_count: int = 0
    conflict_count: int = 0


class TeamMemberCreate(BaseModel):
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH)
    role: Literal["manager", "staff"] = "staff"


class TeamMemberUpdate(BaseModel):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    password: str | None = Field(default=None, min_length=Limits.MIN_PASSWORD_LENGTH)
    role: Literal["manager", "staff"] | None = None
    is_active: bool | None = None


# =============================================================================
# Section / Table Schemas
# =============================================================================


class TableOutput(BaseModel):
    id: int
    restaurant_id: int | None = None
    table_number: int
    section_id: int | None = None
    table_section: str | None = None
    is_active: bool = True
    table_design: str | None = None
    table_link: str | None = None


class SectionOutput(BaseModel):
    id: int
    restaurant_id: int | None = None
    name: str
    design: str | None = None
    section_plan_url: str | None = None
    tables: list[TableOutput] = []


class SectionCreate(BaseModel):
    name: str = Field(min_length=1)
    design: str | None = None


class SectionUpdate(BaseModel):
    name: str | None = None
    design: str | None = None


class TableCreate(BaseModel):
    table_number: int = Field(gt=0)


class TableBatchCreate(BaseModel):
    """Either explicit numbers or a comma-separated string."""
    table_numbers: list[int] | str

    @field_validator("table_numbers")
    @classmethod
    def normalize_numbers(cls, v: list[int] | str) -> list[int] | str:
        if isinstance(v, list):
            return [n for n in v if n > 0]
        return v


# =============================================================================
# POS Schemas
# =============================================================================


class PosConfig(BaseModel):
    pos_type: str | None = None
    username: str | None = None
    password: str | None = None
    base_url: str | None = None
    environment: str = "production"
    is_active: bool = True


class PosForm(BaseModel):
    """
    Credentials as typed in the POS form.

    base_url may be given directly or derived from the provider fields
    (port for mpluskassa; ip, port and database for untill).
    """
    pos_type: Literal["mpluskassa", "untill"]
    username: str = ""
    password: str = ""
    base_url: str | None = None
    port: str | None = None
    ip: str | None = None
    database: str | None = None
    environment: Literal["production", "staging", "development", "test"] = "production"
    is_active: bool = True


class PosTestResult(BaseModel):
    success: bool
    message: str = ""


# =============================================================================
# Payment Schemas
# =============================================================================


class PaymentOutput(BaseModel):
    id: int | str
    order_id: int | str | None = None
    table_number: int | str | None = None
    amount: float | str | None = None
    status: str | None = None
    method: str | None = None
    created_at: datetime | None = None


class PaymentList(BaseModel):
    payments: list[PaymentOutput] = []
    total: int = 0


class PaymentDetail(PaymentOutput):
    restaurant_id: int | None = None
    items: list[dict[str, Any]] = []
    tip_amount: float | str | None = None
    service_fee: float | str | None = None
