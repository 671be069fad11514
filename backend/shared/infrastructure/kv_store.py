"""
Key-value store for bearer tokens and onboarding snapshots.

Two implementations share one async interface:
    - RedisKeyValueStore: lazy redis.asyncio client, used in deployments
    - MemoryKeyValueStore: dict-backed with TTL, used in tests and local dev

Values are strings (JSON is encoded by the callers). Keys are namespaced
with settings.kv_key_prefix.
"""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod

import redis.asyncio as redis

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Async get/set/delete over string values."""

    def __init__(self, prefix: str | None = None):
        self.prefix = settings.kv_key_prefix if prefix is None else prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    @abstractmethod
    async def get(self, key: str) -> str | None: ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None: ...

    @abstractmethod
    async def delete(self, key: str) -> None: ...

    @abstractmethod
    async def ping(self) -> bool: ...

    async def close(self) -> None:
        return None


class RedisKeyValueStore(KeyValueStore):
    """
    Redis-backed store.

    The client is created on first use so that importing the app does not
    open a connection.
    """

    def __init__(self, url: str | None = None, prefix: str | None = None):
        super().__init__(prefix)
        self.url = url or settings.redis_url
        self._client: redis.Redis | None = None
        self._lock = asyncio.Lock()

    async def _get_client(self) -> redis.Redis:
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None:
                self._client = redis.from_url(
                    self.url,
                    decode_responses=True,
                    socket_connect_timeout=settings.redis_socket_timeout,
                    socket_timeout=settings.redis_socket_timeout,
                    health_check_interval=30,
                )
                logger.info("Redis client initialized", timeout=settings.redis_socket_timeout)
        return self._client

    async def get(self, key: str) -> str | None:
        client = await self._get_client()
        return await client.get(self._key(key))

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        client = await self._get_client()
        if ttl_seconds:
            await client.set(self._key(key), value, ex=ttl_seconds)
        else:
            await client.set(self._key(key), value)

    async def delete(self, key: str) -> None:
        client = await self._get_client()
        await client.delete(self._key(key))

    async def ping(self) -> bool:
        client = await self._get_client()
        return bool(await client.ping())

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis client closed")


class MemoryKeyValueStore(KeyValueStore):
    """
    In-process store for tests and local development.

    Expired entries are dropped on read and swept on every write.
    """

    def __init__(self, prefix: str | None = None):
        super().__init__(prefix)
        self._data: dict[str, tuple[str, float | None]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._data.get(self._key(key))
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= time.monotonic():
            del self._data[self._key(key)]
            return None
        return value

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (_, expires_at) in self._data.items() if expires_at is not None and expires_at <= now]
        for k in expired:
            del self._data[k]

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        now = time.monotonic()
        self._purge_expired(now)
        self._data[self._key(key)] = (value, now + ttl_seconds if ttl_seconds else None)

    async def delete(self, key: str) -> None:
        self._data.pop(self._key(key), None)

    async def ping(self) -> bool:
        return True

    def keys(self) -> list[str]:
        return list(self._data)


def create_kv_store(backend: str | None = None) -> KeyValueStore:
    """Build the store configured by settings.kv_backend."""
    backend = backend or settings.kv_backend
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "redis":
        return RedisKeyValueStore()
    raise ValueError(f"Unknown key-value backend: {backend}")
