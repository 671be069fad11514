"""
Health check helpers.

A probe is an async callable that raises (or returns False) when its
component is down. Probes run with a timeout and are summarized into one
report for /api/health/detailed.

Usage:
    @health_check_with_timeout(timeout=3.0, component="kv_store")
    async def check_kv_store(store):
        return await store.ping()

    report = await summarize([check_kv_store(store)])
"""

from __future__ import annotations

import asyncio
import functools
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from shared.config.logging import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class HealthCheckResult:
    component: str
    status: HealthStatus
    latency_ms: float = 0.0
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status.value, "latency_ms": round(self.latency_ms, 2)}
        if self.error:
            data["error"] = self.error
        data.update(self.details)
        return data


async def run_probe(
    component: str,
    probe: Awaitable[Any],
    timeout: float,
) -> HealthCheckResult:
    """Await one probe and turn its outcome into a result; never raises."""
    started = time.perf_counter()

    def elapsed() -> float:
        return (time.perf_counter() - started) * 1000

    try:
        outcome = await asyncio.wait_for(probe, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Health probe timed out", component=component, timeout=timeout)
        return HealthCheckResult(component, HealthStatus.UNHEALTHY, elapsed(), error=f"timeout after {timeout}s")
    except Exception as e:
        logger.warning("Health probe failed", component=component, error=str(e))
        return HealthCheckResult(component, HealthStatus.UNHEALTHY, elapsed(), error=str(e))

    if outcome is False:
        return HealthCheckResult(component, HealthStatus.UNHEALTHY, elapsed(), error="probe returned false")
    details = outcome if isinstance(outcome, dict) else {}
    return HealthCheckResult(component, HealthStatus.HEALTHY, elapsed(), details=details)


def health_check_with_timeout(timeout: float = 5.0, component: str | None = None):
    """Decorate an async probe so calling it yields a HealthCheckResult."""

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[HealthCheckResult]]:
        name = component or func.__name__.removeprefix("check_")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> HealthCheckResult:
            return await run_probe(name, func(*args, **kwargs), timeout)

        return wrapper

    return decorator


async def summarize(checks: list[Awaitable[HealthCheckResult]]) -> dict[str, Any]:
    """Run checks concurrently: healthy only when every component is."""
    results = await asyncio.gather(*checks)
    status = HealthStatus.HEALTHY if all(r.healthy for r in results) else HealthStatus.DEGRADED
    return {
        "status": status.value,
        "components": {r.component: r.to_dict() for r in results},
    }
