"""Unit tests for delivery health checks."""
from __future__ import annotations

import asyncio

from shop_notify.application.diagnostics import (
    AdminEnrollmentHealthCheck,
    DeliveryDiagnostics,
    HealthCheck,
    HealthRegistry,
    HealthStatus,
    ReachabilityHealthCheck,
)
from shop_notify.application.gateway import InMemoryPushGateway
from shop_notify.application.tokens import InMemoryTokenStore


class _ExplodingCheck(HealthCheck):
    @property
    def name(self) -> str:
        return "exploding"

    async def check(self) -> HealthStatus:
        raise RuntimeError("kaboom")


async def _diagnostics(**rows: dict) -> DeliveryDiagnostics:
    store = InMemoryTokenStore()
    for user_id, fields in rows.items():
        await store.upsert(user_id, fields)
    return DeliveryDiagnostics(store, InMemoryPushGateway())


class TestReachabilityHealthCheck:
    def test_unhealthy_without_devices(self):
        async def _run():
            status = await ReachabilityHealthCheck(await _diagnostics()).timed_check()
            assert status.healthy is False
            assert status.detail == "devices=0"
            assert status.latency_ms >= 0
        asyncio.run(_run())

    def test_healthy_with_devices(self):
        async def _run():
            diagnostics = await _diagnostics(u1={"token": "T"})
            assert (await ReachabilityHealthCheck(diagnostics).check()).healthy
        asyncio.run(_run())


class TestAdminEnrollmentHealthCheck:
    def test_name_includes_user(self):
        async def _run():
            check = AdminEnrollmentHealthCheck(await _diagnostics(), "u1")
            assert check.name == "admin_enrollment:u1"
        asyncio.run(_run())

    def test_healthy_only_for_elevated_snapshot(self):
        async def _run():
            diagnostics = await _diagnostics(a={"token": "T", "role": "admin"},
                                             c={"token": "U", "role": "customer"})
            assert (await AdminEnrollmentHealthCheck(diagnostics, "a").check()).healthy
            assert not (await AdminEnrollmentHealthCheck(diagnostics, "c").check()).healthy
        asyncio.run(_run())


class TestHealthRegistry:
    def test_report_aggregates_and_catches(self):
        async def _run():
            diagnostics = await _diagnostics(a={"token": "T", "role": "admin"})
            registry = HealthRegistry()
            registry.register(ReachabilityHealthCheck(diagnostics))
            registry.register(AdminEnrollmentHealthCheck(diagnostics, "a"))
            report = await registry.run_all()
            assert report.overall is True

            registry.register(_ExplodingCheck())
            report = await registry.run_all()
            assert report.overall is False
            body = report.to_dict()
            assert body["healthy"] is False
            assert body["checks"]["exploding"]["detail"] == "exception: kaboom"
            assert body["checks"]["reachability"]["healthy"] is True
        asyncio.run(_run())
