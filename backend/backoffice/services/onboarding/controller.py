"""
Onboarding Controller.

Owns the wizard for one restaurant: the step index, the per-step form data
and the derived completed-steps list. Every operation loads the snapshot,
applies one transition or edit and writes it back.

Usage:
    controller = OnboardingController(snapshots, restaurants, onboarding)

    state = await controller.restore(restaurant_id)
    state = await controller.add_person(restaurant_id, PersonForm(...))
    state = await controller.next(restaurant_id)
    redirect_to = await controller.finish(restaurant_id)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from backoffice.gateway.onboarding import OnboardingGateway
from backoffice.gateway.restaurants import RestaurantGateway
from backoffice.services.onboarding.forms import (
    MessagingForm,
    PaymentForm,
    PersonForm,
    ReviewsForm,
    TablesForm,
    validate_person,
)
from backoffice.services.onboarding.snapshot import (
    MessagingGroup,
    OnboardingSnapshot,
    PaymentLink,
    Person,
    PosSetup,
    ReviewLink,
    TableSetup,
)
from backoffice.services.onboarding.steps import (
    LAST_STEP,
    NON_SKIPPABLE_STEPS,
    WORK_STEPS,
    OnboardingStep,
    is_step_complete,
    personnel_complete,
    pos_complete,
    recompute_completed,
    required_steps_progress,
    resume_step,
    step_status,
    reviews_complete,
    tables_complete,
    validate_step,
)
from backoffice.services.onboarding.store import SnapshotStore
from backoffice.services.pos_urls import derive_base_url, parse_base_url
from shared.config.logging import onboarding_logger as logger
from shared.config.settings import settings
from shared.utils.admin_schemas import PosForm
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.validators import build_review_link, extract_place_id


@dataclass
class OnboardingState:
    """What the wizard screen needs after any operation."""

    restaurant_id: int
    snapshot: OnboardingSnapshot
    locked: bool = False

    @property
    def current_step(self) -> OnboardingStep:
        return OnboardingStep(self.snapshot.current_step)

    def to_dict(self) -> dict[str, Any]:
        return {
            "restaurant_id": self.restaurant_id,
            "current_step": int(self.current_step),
            "step_name": self.current_step.label,
            "completed_steps": list(self.snapshot.completed_steps),
            "required_progress": required_steps_progress(self.snapshot.completed_steps),
            "locked": self.locked,
            "steps": [
                {"step": int(step), "name": step.label, "status": step_status(self.snapshot, step)}
                for step in WORK_STEPS
            ],
            "data": self.snapshot.public_dict(),
        }


class OnboardingController:
    """
    Onboarding wizard state machine.

    Business rules:
    - next() only leaves a step whose minimum fields are filled in
    - previous() and go_to() never validate
    - completed steps are re-derived from data; a stored step whose
      predicate no longer holds is dropped
    - adding a manager marks the personnel step completed
    - the personnel step cannot be skipped
    - navigation is not persisted for the welcome screen or for
      archived restaurants
    - finish() pushes everything to the backend and drops the snapshot
    """

    def __init__(
        self,
        snapshots: SnapshotStore,
        restaurants: RestaurantGateway,
        onboarding: OnboardingGateway,
    ):
        self._snapshots = snapshots
        self._restaurants = restaurants
        self._onboarding = onboarding

    # =========================================================================
    # Loading
    # =========================================================================

    async def _load(self, restaurant_id: int) -> OnboardingSnapshot:
        snapshot = await self._snapshots.load(restaurant_id)
        if snapshot is None:
            snapshot = OnboardingSnapshot(restaurant_id=restaurant_id)
        snapshot.completed_steps = recompute_completed(snapshot)
        return snapshot

    async def _is_locked(self, restaurant_id: int) -> bool:
        restaurant = await self._restaurants.get(restaurant_id)
        return restaurant.is_locked

    async def _require_unlocked(self, restaurant_id: int) -> None:
        if await self._is_locked(restaurant_id):
            raise ValidationError("This restaurant is archived; onboarding is read-only", field="step")

    async def _load_for_edit(self, restaurant_id: int) -> OnboardingSnapshot:
        """Snapshot for an operation that changes it; archived or deleted restaurants are read-only."""
        await self._require_unlocked(restaurant_id)
        return await self._load(restaurant_id)

    async def _save(self, snapshot: OnboardingSnapshot) -> OnboardingState:
        # Only reached through _load_for_edit or go_to on an unlocked restaurant
        await self._snapshots.save(snapshot)
        return OnboardingState(restaurant_id=snapshot.restaurant_id, snapshot=snapshot, locked=False)

    async def restore(self, restaurant_id: int) -> OnboardingState:
        """
        Load the stored snapshot (or a fresh one) and choose the resume step.

        Nothing is written: reopening the wizard does not change storage.
        """
        locked = await self._is_locked(restaurant_id)
        snapshot = await self._load(restaurant_id)
        snapshot.current_step = int(resume_step(snapshot))
        return OnboardingState(restaurant_id=restaurant_id, snapshot=snapshot, locked=locked)

    # =========================================================================
    # Navigation
    # =========================================================================

    async def go_to(self, restaurant_id: int, step: int) -> OnboardingState:
        """Free navigation (sidebar click). No validation."""
        target = OnboardingStep(step)
        locked = await self._is_locked(restaurant_id)
        snapshot = await self._load(restaurant_id)
        snapshot.current_step = int(target)

        if target == OnboardingStep.WELCOME or locked:
            return OnboardingState(restaurant_id=restaurant_id, snapshot=snapshot, locked=locked)

        snapshot.record(target, "visited")
        return await self._save(snapshot)

    async def next(self, restaurant_id: int) -> OnboardingState:
        """
        Leave the current step forward.

        Raises:
            ValidationError: With inline messages when the step's minimum
                fields are missing. Nothing moves in that case.
        """
        snapshot = await self._load_for_edit(restaurant_id)
        step = OnboardingStep(snapshot.current_step)

        if step == OnboardingStep.WELCOME:
            snapshot.current_step = int(OnboardingStep.PERSONNEL)
            snapshot.record(OnboardingStep.PERSONNEL, "visited")
            return await self._save(snapshot)

        if step == OnboardingStep.POS and not snapshot.pos.base_url:
            pos = snapshot.pos
            pos.base_url = derive_base_url(pos.pos_type, port=pos.port, ip=pos.ip, database=pos.database)

        errors = validate_step(snapshot, step)
        if errors:
            raise ValidationError(next(iter(errors.values())), errors=errors)

        if step == OnboardingStep.MESSAGING:
            snapshot.messaging.is_configured = True
        if step not in snapshot.completed_steps:
            snapshot.completed_steps = sorted({*snapshot.completed_steps, int(step)})
        snapshot.record(step, "completed")

        if step < LAST_STEP:
            snapshot.current_step = int(step) + 1
        snapshot.completed_steps = recompute_completed(snapshot)
        return await self._save(snapshot)

    async def previous(self, restaurant_id: int) -> OnboardingState:
        """Step back without validation. Like go_to, welcome and locked restaurants are not persisted."""
        locked = await self._is_locked(restaurant_id)
        snapshot = await self._load(restaurant_id)
        snapshot.current_step = max(int(OnboardingStep.WELCOME), snapshot.current_step - 1)
        if snapshot.current_step == OnboardingStep.WELCOME or locked:
            return OnboardingState(restaurant_id=restaurant_id, snapshot=snapshot, locked=locked)
        snapshot.record(snapshot.current_step, "visited")
        return await self._save(snapshot)

    async def skip(self, restaurant_id: int) -> OnboardingState:
        """
        Move past the current step without completing it.

        The backend is told about the skip first; a failing call leaves the
        wizard where it was.
        """
        snapshot = await self._load_for_edit(restaurant_id)
        step = OnboardingStep(snapshot.current_step)

        if step == OnboardingStep.WELCOME or step in NON_SKIPPABLE_STEPS:
            raise ValidationError(f"The {step.label} step cannot be skipped", field="step")
        if step == LAST_STEP:
            raise ValidationError("The last step cannot be skipped; finish the onboarding instead", field="step")

        await self._onboarding.skip_step(restaurant_id, int(step))
        snapshot.record(step, "skipped")
        snapshot.current_step = int(step) + 1
        return await self._save(snapshot)

    # =========================================================================
    # Slice edits
    # =========================================================================

    async def _edit(self, snapshot: OnboardingSnapshot, step: OnboardingStep) -> OnboardingState:
        snapshot.record(step, "edited")
        snapshot.completed_steps = recompute_completed(snapshot)
        return await self._save(snapshot)

    async def add_person(self, restaurant_id: int, form: PersonForm) -> OnboardingState:
        snapshot = await self._load_for_edit(restaurant_id)

        errors = validate_person(form, snapshot.personnel)
        if errors:
            raise ValidationError(next(iter(errors.values())), errors=errors)

        snapshot.personnel.append(
            Person(
                id=uuid.uuid4().hex,
                first_name=form.first_name,
                last_name=form.last_name,
                email=form.email,
                phone=form.phone,
                password=form.password,
                role=form.role,
            )
        )

        if form.role == "manager" and personnel_complete(snapshot):
            if OnboardingStep.PERSONNEL not in snapshot.completed_steps:
                snapshot.completed_steps = sorted({*snapshot.completed_steps, int(OnboardingStep.PERSONNEL)})
                snapshot.record(OnboardingStep.PERSONNEL, "completed")

        return await self._edit(snapshot, OnboardingStep.PERSONNEL)

    async def remove_person(self, restaurant_id: int, person_id: str) -> OnboardingState:
        snapshot = await self._load_for_edit(restaurant_id)
        remaining = [p for p in snapshot.personnel if str(p.id) != str(person_id)]
        if len(remaining) == len(snapshot.personnel):
            raise NotFoundError("Person", person_id, restaurant_id=restaurant_id)
        snapshot.personnel = remaining
        return await self._edit(snapshot, OnboardingStep.PERSONNEL)

    async def set_payment(self, restaurant_id: int, form: PaymentForm) -> OnboardingState:
        snapshot = await self._load_for_edit(restaurant_id)
        snapshot.payment = PaymentLink(**form.model_dump())
        return await self._edit(snapshot, OnboardingStep.PAYMENT)

    async def refresh_payment(self, restaurant_id: int) -> OnboardingState:
        """Pull the payment-provider link status from the backend's progress record."""
        snapshot = await self._load_for_edit(restaurant_id)
        progress = await self._onboarding.progress(restaurant_id)
        snapshot.payment.connected = bool(progress.get("stripe_connected"))
        return await self._edit(snapshot, OnboardingStep.PAYMENT)

    async def payment_link_url(self, restaurant_id: int) -> str:
        await self._require_unlocked(restaurant_id)
        return await self._onboarding.stripe_oauth_url(restaurant_id)

    async def set_pos(self, restaurant_id: int, form: PosForm) -> OnboardingState:
        snapshot = await self._load_for_edit(restaurant_id)

        fields = {"port": form.port or "", "ip": form.ip or "", "database": form.database or ""}
        base_url = form.base_url or derive_base_url(form.pos_type, **fields)
        if form.base_url and not any(fields.values()):
            fields = parse_base_url(form.pos_type, form.base_url)

        snapshot.pos = PosSetup(
            pos_type=form.pos_type,
            username=form.username,
            password=form.password,
            base_url=base_url,
            environment=form.environment,
            is_active=form.is_active,
            **fields,
        )
        return await self._edit(snapshot, OnboardingStep.POS)

    async def set_tables(self, restaurant_id: int, form: TablesForm) -> OnboardingState:
        snapshot = await self._load_for_edit(restaurant_id)
        tables = TableSetup(
            selected_design=form.selected_design,
            table_sections=form.table_sections or snapshot.tables.table_sections,
            floor_plans=form.floor_plans,
            domain=form.domain,
            notes=form.notes,
        )
        tables.table_count = str(tables.total_tables) if tables.total_tables else ""
        tables.is_configured = bool(tables.selected_design) and tables.has_valid_table
        snapshot.tables = tables
        return await self._edit(snapshot, OnboardingStep.TABLES)

    async def check_domain(self, restaurant_id: int, domain: str) -> dict[str, Any]:
        if not domain.strip():
            raise ValidationError("Please enter a domain name", field="domain")
        return await self._onboarding.check_domain(restaurant_id, domain.strip())

    async def set_reviews(self, restaurant_id: int, form: ReviewsForm) -> OnboardingState:
        snapshot = await self._load_for_edit(restaurant_id)
        place_id = form.place_id.strip() or extract_place_id(form.review_link)
        snapshot.reviews = ReviewLink(
            place_id=place_id,
            review_link=build_review_link(place_id),
            is_configured=bool(place_id),
        )
        return await self._edit(snapshot, OnboardingStep.REVIEWS)

    async def set_messaging(self, restaurant_id: int, form: MessagingForm) -> OnboardingState:
        snapshot = await self._load_for_edit(restaurant_id)
        snapshot.messaging = MessagingGroup(
            restaurant_name=form.restaurant_name.strip(),
            group_created=form.group_created,
            group_link=form.group_link,
            is_configured=form.group_created,
        )
        return await self._edit(snapshot, OnboardingStep.MESSAGING)

    # =========================================================================
    # Completion
    # =========================================================================

    async def finish(self, restaurant_id: int) -> str:
        """
        Push the collected data to the backend, drop the snapshot and return
        the page to navigate to (the restaurant detail page).

        Raises:
            ValidationError: When not on the last step or the messaging
                step's minimum fields are missing.
        """
        snapshot = await self._load_for_edit(restaurant_id)
        if snapshot.current_step != LAST_STEP:
            raise ValidationError("Onboarding can only be finished from the last step", field="step")

        errors = validate_step(snapshot, LAST_STEP)
        if errors:
            raise ValidationError(next(iter(errors.values())), errors=errors)

        if snapshot.personnel:
            await self._onboarding.complete_personnel(
                restaurant_id, [p.to_backend() for p in snapshot.personnel]
            )
        if snapshot.payment.connected:
            await self._onboarding.complete_stripe(
                restaurant_id, True, snapshot.payment.stripe_account_id
            )
        if pos_complete(snapshot):
            pos = snapshot.pos
            await self._onboarding.complete_pos(
                restaurant_id,
                {
                    "pos_type": pos.pos_type,
                    "username": pos.username,
                    "password": pos.password,
                    "base_url": pos.base_url,
                    "environment": pos.environment,
                    "is_active": pos.is_active,
                },
            )
        if tables_complete(snapshot):
            await self._onboarding.configure_qr(restaurant_id, self._qr_payload(snapshot.tables))
        if reviews_complete(snapshot):
            await self._onboarding.complete_google_reviews(
                restaurant_id, snapshot.reviews.place_id, snapshot.reviews.review_link
            )
        if not snapshot.messaging.group_created:
            await self._onboarding.complete_telegram(restaurant_id, snapshot.messaging.restaurant_name)

        await self._onboarding.complete(restaurant_id)

        completed = sorted({int(s) for s in WORK_STEPS if is_step_complete(snapshot, s)} | {int(LAST_STEP)})
        await self._restaurants.update(
            restaurant_id,
            {
                "onboarding_step": required_steps_progress(completed),
                "google_place_id": snapshot.reviews.place_id or None,
            },
        )

        await self._snapshots.delete(restaurant_id)
        logger.info(
            "Onboarding finished",
            restaurant_id=restaurant_id,
            completed_steps=completed,
            personnel=len(snapshot.personnel),
        )
        return settings.restaurant_detail_path.format(restaurant_id=restaurant_id)

    @staticmethod
    def _qr_payload(tables: TableSetup) -> dict[str, Any]:
        selected_tables = {
            section.lower().replace(" ", "_"): {
                "table_numbers": numbers,
                "selected_design": tables.selected_design,
            }
            for section, numbers in tables.table_numbers().items()
        }
        return {
            "domain": tables.domain,
            "notes": tables.notes,
            "selected_tables": selected_tables,
        }

    async def reset(self, restaurant_id: int) -> None:
        await self._snapshots.delete(restaurant_id)
