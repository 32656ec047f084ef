"""Application diagnostics – reachability, admin enrollment and test sends."""
from shop_notify.application.diagnostics.diagnostics import (
    BroadcastGate,
    DeliveryDiagnostics,
    DeviceSummary,
    TestSendResult,
    TokenHealth,
    TokenHealthStatus,
)
from shop_notify.application.diagnostics.health import (
    AdminEnrollmentHealthCheck,
    HealthCheck,
    HealthRegistry,
    HealthReport,
    HealthStatus,
    ReachabilityHealthCheck,
)

__all__ = [
    "AdminEnrollmentHealthCheck",
    "BroadcastGate",
    "DeliveryDiagnostics",
    "DeviceSummary",
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
    "ReachabilityHealthCheck",
    "TestSendResult",
    "TokenHealth",
    "TokenHealthStatus",
]
