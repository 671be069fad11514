"""
Utilities module: Exceptions, validators, health checks.
"""

from shared.utils.exceptions import (
    AppException,
    UnauthorizedError,
    NotFoundError,
    ValidationError,
    BackendError,
    ExternalServiceError,
)
from shared.utils.validators import (
    validate_email,
    validate_password,
    parse_table_numbers,
    extract_place_id,
)

__all__ = [
    # exceptions
    "AppException",
    "UnauthorizedError",
    "NotFoundError",
    "ValidationError",
    "BackendError",
    "ExternalServiceError",
    # validators
    "validate_email",
    "validate_password",
    "parse_table_numbers",
    "extract_place_id",
]
