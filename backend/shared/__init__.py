"""
Shared module for common utilities used by the back-office.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, POS types, storage keys

- shared.infrastructure: Storage and tracing
  - kv_store.py: Redis / in-memory key-value store
  - correlation.py: Request correlation ids

- shared.security: Token handling
  - token_store.py: Session and persistent bearer token locations

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Form input validation
  - health.py: Health check helpers

IMPORT EXAMPLES:
    from shared.config.settings import settings
    from shared.config.constants import PosType, StorageKeys
    from shared.infrastructure.kv_store import create_kv_store
    from shared.utils.exceptions import NotFoundError, ValidationError
"""
