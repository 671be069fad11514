"""
Structured logging for the back-office.

Loggers accept keyword context (`logger.info("Restaurant archived",
restaurant_id=12)`). Production writes one JSON object per line; development
writes coloured single lines. The request's correlation id is attached by
CorrelationIdFilter, and context keys that look like credentials are masked
before they reach a handler.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings

# Context keys whose values never reach the logs in clear text
SENSITIVE_KEYS = frozenset({"password", "password_confirm", "token", "access_token", "authorization"})


def _redact(data: dict[str, Any] | None) -> dict[str, Any] | None:
    if not data:
        return None
    return {k: mask_token(str(v)) if k.lower() in SENSITIVE_KEYS and v else v for k, v in data.items()}


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    return request_id if request_id and request_id != "-" else None


class StructuredFormatter(logging.Formatter):
    """One JSON document per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = _request_id(record)
        if request_id:
            entry["request_id"] = request_id
        context = getattr(record, "extra_data", None)
        if context:
            entry["data"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if settings.debug:
            entry["source"] = f"{record.filename}:{record.lineno} in {record.funcName}"
        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname, self.RESET)
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        parts = [f"{color}{clock} {record.levelname:<8}{self.RESET}"]

        request_id = _request_id(record)
        if request_id:
            parts.append(f"{self.DIM}{request_id[:8]}{self.RESET}")
        parts.append(f"{record.name}: {record.getMessage()}")

        context = getattr(record, "extra_data", None)
        if context:
            parts.append(self.DIM + " ".join(f"{k}={v}" for k, v in context.items()) + self.RESET)

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """Logger whose level methods take keyword context instead of `extra=`."""

    def log_with_context(self, level: int, msg: str, *args: Any, exc_info: Any = None, **context: Any) -> None:
        if self.isEnabledFor(level):
            self._log(level, msg, args, exc_info=exc_info, extra={"extra_data": _redact(context)})

    def debug(self, msg: str, *args: Any, **context: Any) -> None:
        self.log_with_context(logging.DEBUG, msg, *args, **context)

    def info(self, msg: str, *args: Any, **context: Any) -> None:
        self.log_with_context(logging.INFO, msg, *args, **context)

    def warning(self, msg: str, *args: Any, **context: Any) -> None:
        self.log_with_context(logging.WARNING, msg, *args, **context)

    def error(self, msg: str, *args: Any, **context: Any) -> None:
        self.log_with_context(logging.ERROR, msg, *args, **context)

    def critical(self, msg: str, *args: Any, **context: Any) -> None:
        self.log_with_context(logging.CRITICAL, msg, *args, **context)


logging.setLoggerClass(StructuredLogger)


def setup_logging() -> None:
    """Install the stdout handler on the root logger. Called once from the lifespan hook."""
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(StructuredFormatter() if settings.environment == "production" else DevelopmentFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # httpx logs every backend request at INFO
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Usage:
        logger = get_logger(__name__)
        logger.info("Restaurant archived", restaurant_id=12)
        logger.error("Backend unreachable", endpoint="/super_admin/restaurants", exc_info=True)
    """
    return logging.getLogger(name)  # type: ignore


def mask_email(email: str | None) -> str:
    """"sanne@example.com" -> "sa***@example.com"."""
    if not email or "@" not in email:
        return "<no-email>" if not email else "***@invalid"
    local, domain = email.split("@", 1)
    return f"{local[:2] if len(local) > 2 else local[:1]}***@{domain}"


def mask_token(token: str | None) -> str:
    """First 8 characters only, enough to correlate log lines."""
    if not token:
        return "<no-token>"
    return "***" if len(token) <= 8 else f"{token[:8]}..."


backoffice_logger = get_logger("backoffice")
gateway_logger = get_logger("backoffice.gateway")
onboarding_logger = get_logger("backoffice.onboarding")
auth_logger = get_logger("backoffice.auth")

security_audit_logger = get_logger("security.audit")


def audit_auth_event(
    event_type: str,
    client_id: str | None = None,
    email: str | None = None,
    success: bool = True,
    reason: str | None = None,
    **extra: Any,
) -> None:
    """
    Record LOGIN, LOGOUT and FORCED_LOGOUT events on the security.audit logger.

    Failures are logged at WARNING. The email is masked.
    """
    security_audit_logger.log_with_context(
        logging.INFO if success else logging.WARNING,
        f"AUTH_AUDIT: {event_type}",
        event_type=event_type,
        client_id=client_id,
        email=mask_email(email) if email else None,
        success=success,
        reason=reason,
        **extra,
    )
