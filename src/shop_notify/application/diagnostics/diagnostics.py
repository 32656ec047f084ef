"""Application diagnostics – DeliveryDiagnostics.

Read-only, human-facing debug tools.  Nothing here raises: failures come
back as structured results so an operator screen can display them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shop_notify.application.gateway import PushGateway, PushMessage
from shop_notify.application.tokens import TokenStore
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import NoReachableDevicesError, describe_error
from shop_notify.kernel.roles import ELEVATED_ROLES, is_elevated
from shop_notify.observability.logging import get_logger

__all__ = [
    "BroadcastGate",
    "DeliveryDiagnostics",
    "DeviceSummary",
    "TestSendResult",
    "TokenHealth",
    "TokenHealthStatus",
]

logger = get_logger(__name__)

_PREVIEW_LENGTH = 20


class TokenHealthStatus(str, Enum):
    MISSING = "missing"
    MISMATCH = "mismatch"
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class TokenHealth:
    status: TokenHealthStatus
    message: str


@dataclass(frozen=True)
class TestSendResult:
    __test__ = False  # not a pytest class

    success: bool
    error: str | None = None


@dataclass(frozen=True)
class BroadcastGate:
    count: int
    allowed: bool
    warning: str | None = None


@dataclass(frozen=True)
class DeviceSummary:
    user_id: str
    role: str | None
    device_model: str | None
    platform: str | None
    token_preview: str


class DeliveryDiagnostics:
    def __init__(self, store: TokenStore, gateway: PushGateway, settings: NotifySettings | None = None) -> None:
        self._store = store
        self._gateway = gateway
        self._settings = settings or NotifySettings()

    async def get_reachability_count(self) -> int:
        """Number of token rows; ``0`` when the store cannot be counted."""
        try:
            return max(0, await self._store.count())
        except Exception as exc:  # noqa: BLE001
            logger.error("diagnostics.count_failed", error=describe_error(exc))
            return 0

    async def broadcast_gate(self) -> BroadcastGate:
        count = await self.get_reachability_count()
        if count == 0:
            return BroadcastGate(
                count=0,
                allowed=False,
                warning="No registered devices: a broadcast would reach nobody",
            )
        return BroadcastGate(count=count, allowed=True)

    async def require_reachable(self) -> int:
        gate = await self.broadcast_gate()
        if not gate.allowed:
            raise NoReachableDevicesError(gate.warning or "No registered devices")
        return gate.count

    async def check_admin_token_health(self, user_id: str) -> TokenHealth:
        try:
            row = await self._store.get(user_id)
        except Exception as exc:  # noqa: BLE001
            logger.error("diagnostics.health_failed", user_id=user_id, error=describe_error(exc))
            return TokenHealth(TokenHealthStatus.ERROR, f"Token store unavailable: {exc}")

        if row is None:
            return TokenHealth(
                TokenHealthStatus.MISSING,
                f"No device token is registered for user {user_id}",
            )
        if not is_elevated(row.role):
            expected = ", ".join(sorted(role.value for role in ELEVATED_ROLES))
            return TokenHealth(
                TokenHealthStatus.MISMATCH,
                f"Token row role is {row.role!r}; admin alerts need one of: {expected}",
            )
        return TokenHealth(TokenHealthStatus.OK, f"Token row role {row.role!r} receives admin alerts")

    async def send_test_notification(self, token: str, title: str, body: str) -> TestSendResult:
        """Send one message to one token and surface the gateway's own verdict."""
        message = PushMessage(
            to=token,
            title=title,
            body=body,
            data={"type": "test"},
            channel_id=self._settings.channel_id,
        )
        try:
            ticket = await self._gateway.send(message)
        except Exception as exc:  # noqa: BLE001
            error = describe_error(exc)
            logger.warning("diagnostics.test_send_failed", error=error)
            return TestSendResult(success=False, error=error)

        if ticket.ok:
            return TestSendResult(success=True)
        return TestSendResult(success=False, error=ticket.describe())

    async def list_devices(self) -> list[DeviceSummary]:
        try:
            rows = await self._store.all()
        except Exception as exc:  # noqa: BLE001
            logger.error("diagnostics.list_failed", error=describe_error(exc))
            return []
        return [
            DeviceSummary(
                user_id=row.user_id,
                role=row.role,
                device_model=row.device_model,
                platform=row.platform,
                token_preview=f"{row.token[:_PREVIEW_LENGTH]}..." if row.token else "MISSING",
            )
            for row in rows
        ]
