"""
Centralized HTTP exceptions for consistent error handling.

Three failure families reach the admin:
    - authorization failure (401 from the backend): forced logout + redirect
    - validation failure: inline field messages, never logged
    - backend/network failure: error string, logged with context

Usage:
    from shared.utils.exceptions import NotFoundError, ValidationError, BackendError

    raise NotFoundError("Restaurant", restaurant_id)
    raise ValidationError("Please add at least one manager", field="personnel")
    raise BackendError(500, "Internal Server Error", endpoint="/restaurants")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    Pass log_level=None to skip logging entirely.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str | None = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        if log_level:
            log_fn = getattr(logger, log_level, logger.warning)
            log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 401 Unauthorized
# =============================================================================


class UnauthorizedError(AppException):
    """
    Authorization failure (401).

    Raised by the API client whenever the backend answers 401, regardless of
    endpoint. The web layer handles it by clearing both token locations and
    redirecting to the login page.
    """

    def __init__(self, detail: str = "Session expired, please log in again", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="info",
            **log_context,
        )


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Restaurant", 123)
        raise NotFoundError("Onboarding snapshot", restaurant_id=7)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Carries inline messages keyed by field. Validation failures are expected
    user errors and are not logged.

    Usage:
        raise ValidationError("Password must be at least 8 characters", field="password")
        raise ValidationError("Please fix the highlighted fields", errors={"email": "Required"})
    """

    def __init__(
        self,
        detail: str,
        field: str | None = None,
        errors: dict[str, str] | None = None,
    ):
        self.errors: dict[str, str] = dict(errors or {})
        if field and field not in self.errors:
            self.errors[field] = detail

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level=None,
        )


class ConfirmationMismatchError(ValidationError):
    """Typed confirmation text does not match the expected value."""

    def __init__(self, expected_label: str = "restaurant name"):
        super().__init__(
            f"Confirmation text must match the {expected_label} exactly",
            field="confirmation_text",
        )


# =============================================================================
# Upstream failures
# =============================================================================


class BackendError(AppException):
    """
    Non-2xx answer from the REST backend (other than 401).

    The detail is the backend's JSON `detail` when present, otherwise
    "API Error: <status> <reason>".
    """

    def __init__(self, upstream_status: int, detail: str, **log_context: Any):
        self.upstream_status = upstream_status
        status_code = upstream_status if 400 <= upstream_status < 600 else status.HTTP_502_BAD_GATEWAY

        super().__init__(
            status_code=status_code,
            detail=detail,
            log_level="error" if upstream_status >= 500 else "warning",
            upstream_status=upstream_status,
            **log_context,
        )


class ExternalServiceError(AppException):
    """External service error (502 or 503)."""

    def __init__(
        self,
        service: str,
        is_unavailable: bool = False,
        retry_after: int | None = None,
        **log_context: Any,
    ):
        if is_unavailable:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            detail = f"Service {service} temporarily unavailable"
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
            detail = f"Error communicating with {service}"

        headers = None
        if retry_after:
            headers = {"Retry-After": str(retry_after)}

        super().__init__(
            status_code=status_code,
            detail=detail,
            log_level="error",
            headers=headers,
            service=service,
            **log_context,
        )
