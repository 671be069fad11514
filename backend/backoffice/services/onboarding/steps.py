"""
Onboarding steps and their completion rules.

Completion is never trusted from storage: every predicate here is a pure
function of the snapshot data, and the completed-steps list is re-derived
from them whenever a snapshot is loaded or edited.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable

from backoffice.services.onboarding.snapshot import OnboardingSnapshot
from backoffice.services.pos_urls import derive_base_url


class OnboardingStep(IntEnum):
    """Wizard states. WELCOME is the intro screen; completion follows MESSAGING."""

    WELCOME = 0
    PERSONNEL = 1
    PAYMENT = 2
    POS = 3
    TABLES = 4
    REVIEWS = 5
    MESSAGING = 6

    @property
    def label(self) -> str:
        return self.name.lower()


WORK_STEPS: tuple[OnboardingStep, ...] = tuple(s for s in OnboardingStep if s != OnboardingStep.WELCOME)
FIRST_STEP = OnboardingStep.PERSONNEL
LAST_STEP = OnboardingStep.MESSAGING

# Steps that count toward the restaurant's "required setup" progress
REQUIRED_STEPS: tuple[OnboardingStep, ...] = (
    OnboardingStep.PERSONNEL,
    OnboardingStep.PAYMENT,
    OnboardingStep.POS,
)

# Steps that may be skipped without completing them
NON_SKIPPABLE_STEPS = frozenset({OnboardingStep.PERSONNEL})


# =============================================================================
# Completion predicates
# =============================================================================


def personnel_complete(snapshot: OnboardingSnapshot) -> bool:
    return any(p.is_manager for p in snapshot.personnel)


def payment_complete(snapshot: OnboardingSnapshot) -> bool:
    return snapshot.payment.connected


def pos_complete(snapshot: OnboardingSnapshot) -> bool:
    pos = snapshot.pos
    return bool(pos.pos_type and pos.username and pos.password and pos.base_url)


def tables_complete(snapshot: OnboardingSnapshot) -> bool:
    tables = snapshot.tables
    if tables.is_configured:
        return True
    return bool(tables.selected_design) and tables.has_valid_table


def reviews_complete(snapshot: OnboardingSnapshot) -> bool:
    return bool(snapshot.reviews.place_id)


def messaging_complete(snapshot: OnboardingSnapshot) -> bool:
    return snapshot.messaging.group_created or snapshot.messaging.is_configured


PREDICATES: dict[OnboardingStep, Callable[[OnboardingSnapshot], bool]] = {
    OnboardingStep.PERSONNEL: personnel_complete,
    OnboardingStep.PAYMENT: payment_complete,
    OnboardingStep.POS: pos_complete,
    OnboardingStep.TABLES: tables_complete,
    OnboardingStep.REVIEWS: reviews_complete,
    OnboardingStep.MESSAGING: messaging_complete,
}


def is_step_complete(snapshot: OnboardingSnapshot, step: int) -> bool:
    predicate = PREDICATES.get(OnboardingStep(step))
    return predicate(snapshot) if predicate else False


def recompute_completed(snapshot: OnboardingSnapshot) -> list[int]:
    """
    Stored completed steps whose predicate still holds, in step order.

    The result is always a subset of both the stored list and the steps the
    predicates validate, and recomputing it twice gives the same list.
    """
    stored = set(snapshot.completed_steps)
    return [int(step) for step in WORK_STEPS if step in stored and PREDICATES[step](snapshot)]


def resume_step(snapshot: OnboardingSnapshot) -> OnboardingStep:
    """
    Step to show when a wizard is reopened.

    No progress at all (nothing completed, nobody added) shows the welcome
    screen; otherwise the first step not completed, or the last step when
    everything is done.
    """
    completed = set(snapshot.completed_steps)
    if not completed and not snapshot.personnel:
        return OnboardingStep.WELCOME
    for step in WORK_STEPS:
        if step not in completed:
            return step
    return LAST_STEP


def step_status(snapshot: OnboardingSnapshot, step: int) -> str:
    """Sidebar badge: completed, current or pending."""
    if step in snapshot.completed_steps and is_step_complete(snapshot, step):
        return "completed"
    if step == snapshot.current_step:
        return "current"
    return "pending"


def required_steps_progress(completed_steps: list[int]) -> int:
    """Number of required steps done, capped at len(REQUIRED_STEPS)."""
    done = len({s for s in completed_steps if s <= max(REQUIRED_STEPS)})
    return min(done, len(REQUIRED_STEPS))


# =============================================================================
# Minimum fields for moving forward
# =============================================================================


def _personnel_errors(snapshot: OnboardingSnapshot) -> dict[str, str]:
    if not snapshot.managers:
        return {"personnel": "Add at least one manager before continuing"}
    return {}


def _payment_errors(snapshot: OnboardingSnapshot) -> dict[str, str]:
    if not snapshot.payment.connected:
        return {"payment": "Connect the payment provider before continuing"}
    return {}


def _pos_errors(snapshot: OnboardingSnapshot) -> dict[str, str]:
    pos = snapshot.pos
    errors: dict[str, str] = {}
    if not pos.pos_type:
        errors["pos_type"] = "Choose a POS system"
    if not pos.username:
        errors["username"] = "Username is required"
    if not pos.password:
        errors["password"] = "Password is required"
    if pos.pos_type and not (pos.base_url or derive_base_url(pos.pos_type, port=pos.port, ip=pos.ip, database=pos.database)):
        errors["base_url"] = "Fill in the connection details so the POS URL can be built"
    return errors


def _tables_errors(snapshot: OnboardingSnapshot) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not snapshot.tables.selected_design:
        errors["selected_design"] = "Choose a QR stand design"
    if not snapshot.tables.has_valid_table:
        errors["table_sections"] = "Specify at least one table number"
    return errors


def _reviews_errors(snapshot: OnboardingSnapshot) -> dict[str, str]:
    if not snapshot.reviews.place_id:
        return {"place_id": "Provide a Google Place ID"}
    return {}


def _messaging_errors(snapshot: OnboardingSnapshot) -> dict[str, str]:
    if not snapshot.messaging.restaurant_name.strip():
        return {"restaurant_name": "Provide a restaurant name for the group"}
    return {}


STEP_VALIDATORS: dict[OnboardingStep, Callable[[OnboardingSnapshot], dict[str, str]]] = {
    OnboardingStep.PERSONNEL: _personnel_errors,
    OnboardingStep.PAYMENT: _payment_errors,
    OnboardingStep.POS: _pos_errors,
    OnboardingStep.TABLES: _tables_errors,
    OnboardingStep.REVIEWS: _reviews_errors,
    OnboardingStep.MESSAGING: _messaging_errors,
}


def validate_step(snapshot: OnboardingSnapshot, step: int) -> dict[str, str]:
    """Inline error messages keyed by field; empty when the step may be left forward."""
    validator = STEP_VALIDATORS.get(OnboardingStep(step))
    return validator(snapshot) if validator else {}
