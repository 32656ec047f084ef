"""Application session – NotificationSession.

Explicit replacement for process-wide notification state: one object,
built at application start, that owns the registrar and ledger for the
signed-in user and ties them to identity changes and platform events.

Usage::

    session = NotificationSession(settings, identity, roles, platform,
                                  store, ledger, registrar)
    await session.start()
    ...
    session.shutdown()
"""
from __future__ import annotations

from typing import Any, Callable

from shop_notify.application.events import EventStream, Subscription
from shop_notify.application.identity import Identity, IdentityProvider, RoleDirectory
from shop_notify.application.ledger import NotificationLedger
from shop_notify.application.registrar import (
    PushInteraction,
    PushPlatform,
    RegistrationResult,
    TokenRegistrar,
)
from shop_notify.application.tokens import DeviceMetadata, TokenStore
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import describe_error
from shop_notify.kernel.roles import Role
from shop_notify.kernel.time import Clock, SystemClock
from shop_notify.observability.logging import get_logger

__all__ = ["NotificationSession"]

logger = get_logger(__name__)


class NotificationSession:
    def __init__(
        self,
        settings: NotifySettings,
        identity: IdentityProvider,
        roles: RoleDirectory,
        platform: PushPlatform,
        store: TokenStore,
        ledger: NotificationLedger,
        registrar: TokenRegistrar | None = None,
        *,
        device: DeviceMetadata | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings
        self._identity = identity
        self._roles = roles
        self._platform = platform
        self._ledger = ledger
        self._registrar = registrar or TokenRegistrar(platform, store, settings)
        self._device = device or DeviceMetadata()
        self._clock = clock or SystemClock()
        self._interactions: EventStream[PushInteraction] = EventStream("interaction-handlers")
        self._subscriptions: list[Subscription] = []
        self._registration: RegistrationResult | None = None

    @property
    def ledger(self) -> NotificationLedger:
        return self._ledger

    @property
    def registrar(self) -> TokenRegistrar:
        return self._registrar

    @property
    def registration(self) -> RegistrationResult | None:
        return self._registration

    @property
    def started(self) -> bool:
        return bool(self._subscriptions)

    async def start(self) -> RegistrationResult:
        if self.started:
            return self._registration or RegistrationResult()
        self._subscriptions = [
            self._identity.changes.subscribe(self._on_identity_changed),
            self._platform.received.subscribe(self._ledger.handle_received),
            self._platform.interacted.subscribe(self._on_interacted),
        ]
        self._registration = await self._registrar.register()
        current = self._identity.current
        await self._ledger.load(current)
        await self._sync(current)
        # Tokens acquired after start are synced as they arrive.
        self._subscriptions.append(self._registrar.token_changed.subscribe(self._on_token_changed))
        return self._registration

    async def register(self) -> RegistrationResult:
        """Retry token registration, e.g. after the user grants permission in system settings."""
        self._registration = await self._registrar.register()
        return self._registration

    def on_interaction(self, handler: Callable[[PushInteraction], Any]) -> Subscription:
        return self._interactions.subscribe(handler)

    def shutdown(self) -> None:
        for subscription in self._subscriptions:
            subscription.remove()
        self._subscriptions = []
        logger.debug("session.shutdown")

    async def _on_identity_changed(self, identity: Identity | None) -> None:
        await self._ledger.load(identity)
        await self._sync(identity)

    async def _on_token_changed(self, token: str) -> None:
        logger.info("session.token_changed")
        await self._sync(self._identity.current)

    async def _on_interacted(self, interaction: PushInteraction) -> None:
        logger.info(
            "session.push_interaction",
            identifier=interaction.identifier,
            type=interaction.data.get("type"),
            order_id=interaction.data.get("orderId"),
        )
        await self._interactions.emit(interaction)

    async def _sync(self, identity: Identity | None) -> bool:
        token = self._registrar.token
        if identity is None or not token:
            return False
        try:
            role = await self._roles.get_role(identity.user_id)
        except Exception as exc:  # noqa: BLE001
            logger.error("session.role_lookup_failed", user_id=identity.user_id, error=describe_error(exc))
            role = Role.CUSTOMER
        metadata = DeviceMetadata(
            platform=self._device.platform,
            device_model=self._device.device_model,
            email=identity.email,
            display_name=identity.display_name,
            last_active=self._clock.now().isoformat(),
        )
        return await self._registrar.sync_token(identity.user_id, token, role, metadata)
