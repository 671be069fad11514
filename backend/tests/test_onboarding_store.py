"""
Tests for snapshot persistence and the legacy (camelCase) migration.
"""

import json

import pytest

from backoffice.services.onboarding.snapshot import SNAPSHOT_VERSION, OnboardingSnapshot, migrate_snapshot
from backoffice.services.onboarding.store import SnapshotStore


LEGACY_SNAPSHOT = {
    "personnelData": [
        {
            "id": 1712,
            "firstName": "Sanne",
            "lastName": "de Vries",
            "email": "sanne@example.com",
            "phone": "0612345678",
            "password": "secret123",
            "passwordConfirm": "secret123",
            "role": "manager",
        }
    ],
    "stripeData": {"connected": True},
    "posData": {
        "posType": "mpluskassa",
        "username": "kassa",
        "password": "pw",
        "baseUrl": "https://api.mpluskassa.nl:34562",
        "environment": "production",
        "isActive": True,
    },
    "qrStandData": {
        "selectedDesign": "classic",
        "tableCount": "3",
        "floorPlan": "plan.png",
    },
    "googleReviewData": {
        "reviewLink": "https://search.google.com/local/writereview?placeid=ChIJabc",
        "isConfigured": True,
    },
    "telegramData": {"groupCreated": False, "restaurantName": "Cafe"},
    "completedSteps": [1, 2, 3],
    "currentStep": 4,
    "savedAt": "2024-05-01T10:00:00+00:00",
}


class TestMigration:
    def test_legacy_snapshot_is_lifted(self):
        snapshot = OnboardingSnapshot.from_json(json.dumps(LEGACY_SNAPSHOT))

        assert snapshot.version == SNAPSHOT_VERSION
        assert snapshot.personnel[0].first_name == "Sanne"
        assert snapshot.payment.connected is True
        assert snapshot.pos.base_url == "https://api.mpluskassa.nl:34562"
        assert snapshot.current_step == 4
        assert snapshot.completed_steps == [1, 2, 3]

    def test_default_sections_and_floor_plans(self):
        snapshot = OnboardingSnapshot.from_json(LEGACY_SNAPSHOT)

        assert set(snapshot.tables.table_sections) == {"bar", "binnen", "terras", "lounge"}
        assert snapshot.tables.floor_plans == ["plan.png"]

    def test_place_id_extracted_from_review_link(self):
        snapshot = OnboardingSnapshot.from_json(LEGACY_SNAPSHOT)
        assert snapshot.reviews.place_id == "ChIJabc"

    def test_password_confirmation_dropped(self):
        migrated = migrate_snapshot(dict(LEGACY_SNAPSHOT))
        assert "passwordConfirm" not in migrated["personnel"][0]

    def test_numeric_section_values_become_strings(self):
        data = dict(LEGACY_SNAPSHOT, qrStandData={"selectedDesign": "x", "tableSections": {"bar": 5, "terras": None}})
        snapshot = OnboardingSnapshot.from_json(data)
        assert snapshot.tables.table_sections == {"bar": "5", "terras": ""}
        assert snapshot.tables.table_numbers() == {"bar": [5]}

    def test_current_version_untouched(self):
        data = OnboardingSnapshot(restaurant_id=3).model_dump(mode="json")
        assert migrate_snapshot(data) is data


class TestSnapshotStore:
    @pytest.mark.asyncio
    async def test_missing_snapshot(self, kv_store):
        assert await SnapshotStore(kv_store).load(1) is None

    @pytest.mark.asyncio
    async def test_save_and_load(self, kv_store):
        store = SnapshotStore(kv_store)
        snapshot = OnboardingSnapshot(restaurant_id=9, completed_steps=[2], current_step=3)

        await store.save(snapshot)
        loaded = await store.load(9)

        assert loaded.completed_steps == [2]
        assert loaded.current_step == 3
        assert loaded.saved_at is not None

    @pytest.mark.asyncio
    async def test_key_per_restaurant(self, kv_store):
        await SnapshotStore(kv_store).save(OnboardingSnapshot(restaurant_id=42))
        assert await kv_store.get("onboarding_42") is not None

    @pytest.mark.asyncio
    async def test_legacy_record_loads(self, kv_store):
        await kv_store.set("onboarding_5", json.dumps(LEGACY_SNAPSHOT))

        snapshot = await SnapshotStore(kv_store).load(5)

        assert snapshot.restaurant_id == 5
        assert snapshot.reviews.place_id == "ChIJabc"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "[]",
            "\"x\"",
            "null",
            '{"version": 1, "tables": "x"}',
            '{"version": 1, "qrStandData": {"tableSections": ["1"]}}',
        ],
    )
    async def test_corrupt_record_treated_as_absent(self, kv_store, raw):
        await kv_store.set("onboarding_5", raw)
        assert await SnapshotStore(kv_store).load(5) is None

    @pytest.mark.asyncio
    async def test_malformed_legacy_fields_are_tolerated(self, kv_store):
        await kv_store.set("onboarding_5", '{"version": "2", "personnelData": ["bad", {"id": 1, "firstName": "Sanne", "lastName": "de Vries", "email": "sanne@example.com"}]}')

        snapshot = await SnapshotStore(kv_store).load(5)

        assert snapshot.version == 2
        assert [p.first_name for p in snapshot.personnel] == ["Sanne"]

    @pytest.mark.asyncio
    async def test_delete(self, kv_store):
        store = SnapshotStore(kv_store)
        await store.save(OnboardingSnapshot(restaurant_id=1))
        await store.delete(1)
        assert await store.load(1) is None

    def test_public_dict_hides_passwords(self):
        snapshot = OnboardingSnapshot.from_json(LEGACY_SNAPSHOT)
        data = snapshot.public_dict()
        assert "password" not in data["personnel"][0]
        assert "password" not in data["pos"]
