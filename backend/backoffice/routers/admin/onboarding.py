"""
Onboarding wizard endpoints.

Every call answers with the wizard state (current step, completed steps,
required-steps progress and the snapshot without passwords), except finish,
which answers with the page to navigate to.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from backoffice.routers._common.deps import get_onboarding_controller
from backoffice.services.onboarding import (
    MessagingForm,
    OnboardingController,
    PaymentForm,
    PersonForm,
    ReviewsForm,
    TablesForm,
)
from shared.utils.admin_schemas import PosForm


router = APIRouter(prefix="/onboarding/{restaurant_id}", tags=["admin-onboarding"])


class GoToStep(BaseModel):
    step: int = Field(ge=0, le=6)


class DomainCheck(BaseModel):
    domain: str


# =============================================================================
# Navigation
# =============================================================================


@router.get("")
async def restore(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> dict:
    state = await controller.restore(restaurant_id)
    return state.to_dict()


@router.post("/step")
async def go_to_step(
    restaurant_id: int,
    body: GoToStep,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.go_to(restaurant_id, body.step)
    return state.to_dict()


@router.post("/next")
async def next_step(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> dict:
    state = await controller.next(restaurant_id)
    return state.to_dict()


@router.post("/previous")
async def previous_step(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> dict:
    state = await controller.previous(restaurant_id)
    return state.to_dict()


@router.post("/skip")
async def skip_step(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> dict:
    state = await controller.skip(restaurant_id)
    return state.to_dict()


@router.post("/finish")
async def finish(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> dict:
    redirect_to = await controller.finish(restaurant_id)
    return {"success": True, "redirect_to": redirect_to}


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def reset(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> None:
    """Drop the stored wizard state so onboarding starts over."""
    await controller.reset(restaurant_id)


# =============================================================================
# Step data
# =============================================================================


@router.post("/personnel", status_code=status.HTTP_201_CREATED)
async def add_person(
    restaurant_id: int,
    body: PersonForm,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.add_person(restaurant_id, body)
    return state.to_dict()


@router.delete("/personnel/{person_id}")
async def remove_person(
    restaurant_id: int,
    person_id: str,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.remove_person(restaurant_id, person_id)
    return state.to_dict()


@router.put("/payment")
async def set_payment(
    restaurant_id: int,
    body: PaymentForm,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.set_payment(restaurant_id, body)
    return state.to_dict()


@router.post("/payment/refresh")
async def refresh_payment(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> dict:
    state = await controller.refresh_payment(restaurant_id)
    return state.to_dict()


@router.get("/payment/link")
async def payment_link(restaurant_id: int, controller: OnboardingController = Depends(get_onboarding_controller)) -> dict:
    return {"url": await controller.payment_link_url(restaurant_id)}


@router.put("/pos")
async def set_pos(
    restaurant_id: int,
    body: PosForm,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.set_pos(restaurant_id, body)
    return state.to_dict()


@router.put("/tables")
async def set_tables(
    restaurant_id: int,
    body: TablesForm,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.set_tables(restaurant_id, body)
    return state.to_dict()


@router.post("/tables/check-domain")
async def check_domain(
    restaurant_id: int,
    body: DomainCheck,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    return await controller.check_domain(restaurant_id, body.domain)


@router.put("/reviews")
async def set_reviews(
    restaurant_id: int,
    body: ReviewsForm,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.set_reviews(restaurant_id, body)
    return state.to_dict()


@router.put("/messaging")
async def set_messaging(
    restaurant_id: int,
    body: MessagingForm,
    controller: OnboardingController = Depends(get_onboarding_controller),
) -> dict:
    state = await controller.set_messaging(restaurant_id, body)
    return state.to_dict()
