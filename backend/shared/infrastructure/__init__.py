"""
Infrastructure module: key-value store and request correlation.
"""

from shared.infrastructure.kv_store import (
    KeyValueStore,
    RedisKeyValueStore,
    MemoryKeyValueStore,
    create_kv_store,
)
from shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    get_request_id,
)

__all__ = [
    "KeyValueStore",
    "RedisKeyValueStore",
    "MemoryKeyValueStore",
    "create_kv_store",
    "CorrelationIdMiddleware",
    "get_request_id",
]
