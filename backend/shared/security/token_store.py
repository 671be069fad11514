"""
Bearer token storage.

A token lives in one of two locations per browser (client id):
    - session: expires after settings.session_token_ttl_seconds
    - persistent: kept until logout ("remember me")

Reads check the persistent location first, then the session location.
Clearing always removes both.
"""

from __future__ import annotations

from shared.config.constants import StorageKeys
from shared.config.logging import get_logger, mask_token
from shared.config.settings import settings
from shared.infrastructure.kv_store import KeyValueStore

logger = get_logger(__name__)

SESSION = "session"
PERSISTENT = "persistent"


class TokenStore:
    """Session and persistent token locations on top of a key-value store."""

    def __init__(self, store: KeyValueStore, session_ttl: int | None = None):
        self.store = store
        self.session_ttl = session_ttl or settings.session_token_ttl_seconds

    @staticmethod
    def _key(location: str, client_id: str) -> str:
        return f"{StorageKeys.AUTH_TOKEN}:{location}:{client_id}"

    async def save(self, client_id: str, token: str, remember: bool = False) -> None:
        """Store a token in the persistent location when remember is set, otherwise in the session one."""
        if remember:
            await self.store.set(self._key(PERSISTENT, client_id), token)
        else:
            await self.store.set(self._key(SESSION, client_id), token, ttl_seconds=self.session_ttl)
        logger.debug(
            "Token stored",
            location=PERSISTENT if remember else SESSION,
            token=mask_token(token),
        )

    async def get(self, client_id: str | None) -> str | None:
        if not client_id:
            return None
        token = await self.store.get(self._key(PERSISTENT, client_id))
        if token:
            return token
        return await self.store.get(self._key(SESSION, client_id))

    async def clear(self, client_id: str | None) -> None:
        if not client_id:
            return
        await self.store.delete(self._key(PERSISTENT, client_id))
        await self.store.delete(self._key(SESSION, client_id))
