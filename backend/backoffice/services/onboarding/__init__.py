"""
Onboarding wizard.

Layers:
    steps       - step enum, completion predicates, minimum-field checks
    snapshot    - versioned persisted state and the legacy migration
    store       - snapshot persistence on the key-value store
    forms       - form payloads and personnel validation
    controller  - the state machine the routes drive
"""

from .controller import OnboardingController, OnboardingState
from .forms import MessagingForm, PaymentForm, PersonForm, ReviewsForm, TablesForm
from .snapshot import OnboardingSnapshot, migrate_snapshot
from .steps import OnboardingStep, recompute_completed, resume_step
from .store import SnapshotStore

__all__ = [
    "OnboardingController",
    "OnboardingState",
    "OnboardingSnapshot",
    "OnboardingStep",
    "SnapshotStore",
    "PersonForm",
    "PaymentForm",
    "TablesForm",
    "ReviewsForm",
    "MessagingForm",
    "migrate_snapshot",
    "recompute_completed",
    "resume_step",
]
