"""Application registrar – TokenRegistrar.

Acquires a push token from the host platform and keeps the Token Store in
sync with the current (identity, token, role) triple.  Registration never
raises: a failure leaves the registrar without a token and records a
human-readable reason in :attr:`TokenRegistrar.registration_error`.

Every time a registration yields a token different from the previous one,
the new token is published on :attr:`TokenRegistrar.token_changed` so the
owner can write it to the Token Store for the signed-in user.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass

from shop_notify.application.events import EventStream
from shop_notify.application.registrar.platform import (
    NotificationChannel,
    PermissionStatus,
    PushPlatform,
)
from shop_notify.application.tokens import DeviceMetadata, TokenStore
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import RegistrationError, TimeoutError as AppTimeoutError, describe_error
from shop_notify.kernel.roles import Role
from shop_notify.observability.logging import get_logger

__all__ = ["RegistrationResult", "TokenRegistrar"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegistrationResult:
    token: str | None = None
    error: str | None = None
    reason: str | None = None

    @property
    def registered(self) -> bool:
        return self.token is not None


class TokenRegistrar:
    def __init__(self, platform: PushPlatform, store: TokenStore, settings: NotifySettings | None = None) -> None:
        self._platform = platform
        self._store = store
        self._settings = settings or NotifySettings()
        self._token: str | None = None
        self._error: str | None = None
        self._token_changed: EventStream[str] = EventStream("token-changed")

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def token_changed(self) -> EventStream[str]:
        return self._token_changed

    @property
    def registration_error(self) -> str | None:
        return self._error

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel(id=self._settings.channel_id, name=self._settings.channel_name)

    async def ensure_channel(self) -> None:
        """Declare the delivery channel; the platform treats repeats as no-ops."""
        if self._platform.requires_channel:
            await self._platform.set_notification_channel(self.channel)

    async def register(self) -> RegistrationResult:
        try:
            await self.ensure_channel()
        except Exception as exc:  # noqa: BLE001
            logger.warning("registrar.channel_failed", error=describe_error(exc))

        try:
            token = await self._acquire()
        except RegistrationError as exc:
            self._token = None
            self._error = exc.message
            logger.warning("registrar.registration_failed", **exc.log_fields())
            return RegistrationResult(error=exc.message, reason=exc.reason)

        previous, self._token = self._token, token
        self._error = None
        logger.info("registrar.registered")
        if token != previous:
            await self._token_changed.emit(token)
        return RegistrationResult(token=token)

    async def _acquire(self) -> str:
        if not self._platform.is_physical_device:
            raise RegistrationError(
                "Push notifications require a physical device", reason="not_a_device"
            )

        try:
            status = await self._platform.get_permission_status()
            if status != PermissionStatus.GRANTED:
                status = await self._platform.request_permission()
        except Exception as exc:  # noqa: BLE001
            raise RegistrationError(
                f"Permission check failed: {exc}", reason="permission_error", cause=exc
            ) from exc
        if status != PermissionStatus.GRANTED:
            raise RegistrationError(
                "Notification permission was not granted", reason="permission_denied"
            )

        project_id = self._settings.project_id or None
        if project_id is None:
            logger.warning("registrar.missing_project_id")

        try:
            token = await self._race_token(project_id)
        except AppTimeoutError as exc:
            raise RegistrationError(exc.message, reason="timeout", cause=exc) from exc
        except Exception as exc:  # noqa: BLE001
            raise RegistrationError(
                str(exc) or "Unknown registration error", reason="platform_error", cause=exc
            ) from exc

        if not token:
            raise RegistrationError("Platform returned an empty push token", reason="platform_error")
        return token

    async def _race_token(self, project_id: str | None) -> str:
        timeout = self._settings.token_timeout_seconds
        try:
            return await asyncio.wait_for(self._platform.get_push_token(project_id), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise AppTimeoutError(f"Push token timeout after {timeout}s") from exc

    async def sync_token(
        self,
        user_id: str | None,
        token: str | None,
        role: Role | str | None,
        metadata: DeviceMetadata | None = None,
    ) -> bool:
        """Merge-upsert the triple into the Token Store; ``False`` when skipped or failed."""
        if not user_id or not token:
            return False

        fields = {"token": token, "userId": user_id}
        if role is not None:
            fields["role"] = role.value if isinstance(role, Role) else str(role)
        if metadata is not None:
            fields.update(metadata.to_fields())

        try:
            await self._store.upsert(user_id, fields)
        except Exception as exc:  # noqa: BLE001
            logger.error("registrar.sync_failed", user_id=user_id, error=describe_error(exc))
            return False
        logger.info("registrar.token_synced", user_id=user_id, role=fields.get("role"))
        return True
