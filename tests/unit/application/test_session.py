"""Unit tests for NotificationSession wiring."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from shop_notify.application.identity import Identity, InMemoryIdentityService
from shop_notify.application.ledger import InMemoryLedgerStorage, NotificationLedger
from shop_notify.application.registrar import (
    InMemoryPushPlatform,
    PermissionStatus,
    PushInteraction,
    ReceivedPush,
)
from shop_notify.application.session import NotificationSession
from shop_notify.application.tokens import DeviceMetadata, InMemoryTokenStore
from shop_notify.config import NotifySettings
from shop_notify.kernel.roles import Role
from shop_notify.kernel.time import FrozenClock

ALICE = Identity(user_id="u-alice", email="alice@example.com", display_name="Alice")
BOB = Identity(user_id="u-bob", email="bob@example.com")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
@dataclass
class _World:
    identity: InMemoryIdentityService
    platform: InMemoryPushPlatform
    store: InMemoryTokenStore
    ledger: NotificationLedger
    session: NotificationSession


def _world(
    platform: InMemoryPushPlatform | None = None,
    roles: Any = None,
    settings: NotifySettings | None = None,
) -> _World:
    clock = FrozenClock()
    settings = settings or NotifySettings(project_id="proj-1")
    identity = InMemoryIdentityService()
    platform = platform or InMemoryPushPlatform(token="ExponentPushToken[dev]")
    store = InMemoryTokenStore(clock)
    ledger = NotificationLedger(InMemoryLedgerStorage(), platform, settings=settings, clock=clock)
    session = NotificationSession(
        settings, identity, roles or identity, platform, store, ledger,
        device=DeviceMetadata(platform="android", device_model="Pixel 8"),
        clock=clock,
    )
    return _World(identity, platform, store, ledger, session)


class _BrokenDirectory(InMemoryIdentityService):
    async def get_role(self, user_id: str) -> Role:
        raise RuntimeError("directory offline")


# ---------------------------------------------------------------------------
# start()
# ---------------------------------------------------------------------------
class TestStart:
    def test_registers_loads_and_syncs_signed_in_user(self):
        async def _run():
            w = _world()
            await w.identity.sign_in(ALICE, Role.MANAGER)
            result = await w.session.start()
            assert result.registered
            assert w.session.started
            assert w.ledger.current_user == ALICE
            raw = w.store.raw(ALICE.user_id)
            assert raw is not None
            assert raw["token"] == "ExponentPushToken[dev]"
            assert raw["role"] == "manager"
            assert raw["deviceModel"] == "Pixel 8"
            assert raw["platform"] == "android"
            assert raw["email"] == "alice@example.com"
            assert raw["displayName"] == "Alice"
            assert raw["lastActive"] == FrozenClock().now().isoformat()
        asyncio.run(_run())

    def test_start_without_user_does_not_sync(self):
        async def _run():
            w = _world()
            await w.session.start()
            assert await w.store.count() == 0
            assert w.ledger.current_user is None
        asyncio.run(_run())

    def test_start_twice_subscribes_once(self):
        async def _run():
            w = _world()
            await w.session.start()
            await w.session.start()
            assert w.platform.received.handler_count == 1
            assert len(w.platform.token_requests) == 1
        asyncio.run(_run())

    def test_registration_failure_skips_sync(self):
        async def _run():
            w = _world(InMemoryPushPlatform(physical_device=False))
            await w.identity.sign_in(ALICE)
            result = await w.session.start()
            assert not result.registered
            assert w.session.registrar.registration_error
            assert await w.store.count() == 0
            assert w.ledger.current_user == ALICE
        asyncio.run(_run())

    def test_role_lookup_failure_falls_back_to_customer(self):
        async def _run():
            directory = _BrokenDirectory()
            w = _world(roles=directory)
            await w.identity.sign_in(ALICE)
            await w.session.start()
            assert w.store.raw(ALICE.user_id)["role"] == "customer"  # type: ignore[index]
        asyncio.run(_run())


# ---------------------------------------------------------------------------
# Identity changes
# ---------------------------------------------------------------------------
class TestIdentityChanges:
    def test_sign_in_after_start_syncs_and_loads(self):
        async def _run():
            w = _world()
            await w.session.start()
            await w.identity.sign_in(BOB, Role.SUPPORT)
            assert w.ledger.current_user == BOB
            assert (await w.store.get(BOB.user_id)).role == "support"  # type: ignore[union-attr]
        asyncio.run(_run())

    def test_role_change_is_resynced(self):
        async def _run():
            w = _world()
            await w.identity.sign_in(ALICE, Role.CUSTOMER)
            await w.session.start()
            w.identity.set_role(ALICE.user_id, Role.ADMIN)
            await w.identity.sign_in(ALICE)
            assert (await w.store.get(ALICE.user_id)).role == "admin"  # type: ignore[union-attr]
        asyncio.run(_run())

    def test_switching_users_keeps_ledgers_apart(self):
        async def _run():
            w = _world()
            await w.identity.sign_in(ALICE)
            await w.session.start()
            await w.ledger.add_notification("for alice", "m")
            await w.identity.sign_in(BOB)
            assert w.ledger.notifications == []
            await w.identity.sign_out()
            assert w.ledger.current_user is None
            await w.identity.sign_in(ALICE)
            assert [e.title for e in w.ledger.notifications] == ["for alice"]
        asyncio.run(_run())


# ---------------------------------------------------------------------------
# Token changes
# ---------------------------------------------------------------------------
class TestTokenChanges:
    def test_token_after_timed_out_start_is_synced(self):
        async def _run():
            platform = InMemoryPushPlatform(token="ExponentPushToken[new]", token_delay=1)
            w = _world(platform, settings=NotifySettings(project_id="proj-1", token_timeout_seconds=0.01))
            await w.identity.sign_in(ALICE, Role.MANAGER)
            first = await w.session.start()
            assert first.reason == "timeout"
            assert w.store.raw(ALICE.user_id) is None

            platform.token_delay = None
            second = await w.session.registrar.register()
            assert second.token == "ExponentPushToken[new]"
            raw = w.store.raw(ALICE.user_id)
            assert raw is not None
            assert raw["token"] == "ExponentPushToken[new]"
            assert raw["role"] == "manager"
        asyncio.run(_run())

    def test_session_register_retries_after_denial(self):
        async def _run():
            platform = InMemoryPushPlatform(
                token="ExponentPushToken[late]",
                permission=PermissionStatus.DENIED,
                grant_on_request=False,
            )
            w = _world(platform)
            await w.identity.sign_in(ALICE)
            assert not (await w.session.start()).registered

            platform.grant_on_request = True
            result = await w.session.register()
            assert result.registered
            assert w.session.registration == result
            assert (await w.store.get(ALICE.user_id)).token == "ExponentPushToken[late]"  # type: ignore[union-attr]
        asyncio.run(_run())

    def test_rotated_token_replaces_stored_one(self):
        async def _run():
            w = _world()
            await w.identity.sign_in(ALICE)
            await w.session.start()
            w.platform.token = "ExponentPushToken[rotated]"
            await w.session.register()
            assert w.store.raw(ALICE.user_id)["token"] == "ExponentPushToken[rotated]"  # type: ignore[index]
        asyncio.run(_run())

    def test_same_token_is_not_republished(self):
        async def _run():
            w = _world()
            seen: list[str] = []
            w.session.registrar.token_changed.subscribe(seen.append)
            await w.session.start()
            await w.session.register()
            assert seen == ["ExponentPushToken[dev]"]
        asyncio.run(_run())

    def test_token_without_user_is_not_synced(self):
        async def _run():
            w = _world()
            await w.session.start()
            w.platform.token = "ExponentPushToken[other]"
            await w.session.register()
            assert await w.store.count() == 0
        asyncio.run(_run())


# ---------------------------------------------------------------------------
# Platform events
# ---------------------------------------------------------------------------
class TestPlatformEvents:
    def test_received_push_lands_in_ledger(self):
        async def _run():
            w = _world()
            await w.identity.sign_in(ALICE)
            await w.session.start()
            await w.platform.deliver(ReceivedPush("p1", "Sale", "Big sale", {"type": "broadcast"}))
            assert [e.id for e in w.ledger.notifications] == ["p1"]
        asyncio.run(_run())

    def test_interaction_reaches_handlers(self):
        async def _run():
            w = _world()
            seen: list[PushInteraction] = []
            w.session.on_interaction(seen.append)
            await w.session.start()
            tap = PushInteraction("p1", {"type": "order_update", "orderId": "o-1"})
            await w.platform.interact(tap)
            assert seen == [tap]
        asyncio.run(_run())

    def test_shutdown_detaches_everything(self):
        async def _run():
            w = _world()
            await w.identity.sign_in(ALICE)
            await w.session.start()
            w.session.shutdown()
            assert not w.session.started
            assert w.platform.received.handler_count == 0
            assert w.platform.interacted.handler_count == 0
            assert w.identity.changes.handler_count == 0
            assert w.session.registrar.token_changed.handler_count == 0
            await w.platform.deliver(ReceivedPush("p1", "t", "b", {}))
            assert w.ledger.notifications == []
        asyncio.run(_run())
