"""
Tests for the in-memory key-value store.
"""

import time

import pytest

from shared.infrastructure.kv_store import MemoryKeyValueStore


class TestMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_set_get_delete(self):
        store = MemoryKeyValueStore(prefix="t")
        await store.set("a", "1")
        assert await store.get("a") == "1"
        await store.delete("a")
        assert await store.get("a") is None

    @pytest.mark.asyncio
    async def test_expired_entry_is_not_returned(self):
        store = MemoryKeyValueStore()
        await store.set("session", "token", ttl_seconds=60)
        store._data["session"] = ("token", time.monotonic() - 1)

        assert await store.get("session") is None
        assert store.keys() == []

    @pytest.mark.asyncio
    async def test_write_sweeps_expired_entries(self):
        store = MemoryKeyValueStore()
        await store.set("abandoned", "token", ttl_seconds=60)
        store._data["abandoned"] = ("token", time.monotonic() - 1)

        await store.set("other", "value")

        assert store.keys() == ["other"]
