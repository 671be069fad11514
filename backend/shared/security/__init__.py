"""
Security module: bearer token storage.
"""

from shared.security.token_store import TokenStore, SESSION, PERSISTENT

__all__ = [
    "TokenStore",
    "SESSION",
    "PERSISTENT",
]
