"""
Snapshot persistence on the key-value store.

One key per restaurant (`onboarding_<restaurantId>`), shared by every admin.
Writes are last-writer-wins; there is no version check or lock.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from backoffice.services.onboarding.snapshot import OnboardingSnapshot, utcnow
from shared.config.constants import StorageKeys
from shared.config.logging import onboarding_logger as logger
from shared.infrastructure.kv_store import KeyValueStore


class SnapshotStore:
    def __init__(self, store: KeyValueStore):
        self.store = store

    async def load(self, restaurant_id: int) -> OnboardingSnapshot | None:
        """
        Stored snapshot, migrated to the current version.

        An unreadable record is logged and treated as absent so the wizard
        can start over.
        """
        raw = await self.store.get(StorageKeys.onboarding(restaurant_id))
        if raw is None:
            return None
        try:
            snapshot = OnboardingSnapshot.from_json(raw)
        except (ValueError, TypeError, AttributeError, PydanticValidationError) as e:
            logger.warning(
                "Discarding unreadable onboarding snapshot",
                restaurant_id=restaurant_id,
                error=str(e),
            )
            return None
        snapshot.restaurant_id = restaurant_id
        return snapshot

    async def save(self, snapshot: OnboardingSnapshot) -> OnboardingSnapshot:
        snapshot.saved_at = utcnow()
        await self.store.set(StorageKeys.onboarding(snapshot.restaurant_id), snapshot.to_json())
        return snapshot

    async def delete(self, restaurant_id: int) -> None:
        await self.store.delete(StorageKeys.onboarding(restaurant_id))
        logger.info("Onboarding snapshot cleared", restaurant_id=restaurant_id)
