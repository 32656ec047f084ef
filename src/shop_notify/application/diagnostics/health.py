"""Application diagnostics – delivery health checks and registry."""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from shop_notify.application.diagnostics.diagnostics import DeliveryDiagnostics, TokenHealthStatus

__all__ = [
    "AdminEnrollmentHealthCheck",
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
    "ReachabilityHealthCheck",
]


@dataclass
class HealthStatus:
    healthy: bool
    detail: str | None = None
    latency_ms: float = 0.0


class HealthCheck(ABC):
    """Base class for all delivery health checks."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def check(self) -> HealthStatus: ...

    async def timed_check(self) -> HealthStatus:
        start = time.monotonic()
        status = await self.check()
        status.latency_ms = (time.monotonic() - start) * 1000
        return status


class ReachabilityHealthCheck(HealthCheck):
    """Healthy when at least one device would receive a broadcast."""

    def __init__(self, diagnostics: DeliveryDiagnostics) -> None:
        self._diagnostics = diagnostics

    @property
    def name(self) -> str:
        return "reachability"

    async def check(self) -> HealthStatus:
        count = await self._diagnostics.get_reachability_count()
        return HealthStatus(healthy=count > 0, detail=f"devices={count}")


class AdminEnrollmentHealthCheck(HealthCheck):
    """Healthy when *user_id* is enrolled with an elevated role snapshot."""

    def __init__(self, diagnostics: DeliveryDiagnostics, user_id: str) -> None:
        self._diagnostics = diagnostics
        self._user_id = user_id

    @property
    def name(self) -> str:
        return f"admin_enrollment:{self._user_id}"

    async def check(self) -> HealthStatus:
        health = await self._diagnostics.check_admin_token_health(self._user_id)
        return HealthStatus(healthy=health.status == TokenHealthStatus.OK, detail=health.message)


@dataclass
class HealthReport:
    results: dict[str, HealthStatus] = field(default_factory=dict)

    @property
    def overall(self) -> bool:
        return all(s.healthy for s in self.results.values())

    def to_dict(self) -> dict:
        return {
            "healthy": self.overall,
            "checks": {
                name: {
                    "healthy": s.healthy,
                    "detail": s.detail,
                    "latency_ms": round(s.latency_ms, 2),
                }
                for name, s in self.results.items()
            },
        }


class HealthRegistry:
    """Runs registered health checks and aggregates results."""

    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    async def run_all(self) -> HealthReport:
        report = HealthReport()
        for check in self._checks:
            try:
                status = await check.timed_check()
            except Exception as exc:  # noqa: BLE001
                status = HealthStatus(healthy=False, detail=f"exception: {exc}")
            report.results[check.name] = status
        return report
