"""Application registrar – PushPlatform protocol, platform events + in-memory fake."""
from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from shop_notify.application.events import EventStream

__all__ = [
    "InMemoryPushPlatform",
    "NotificationChannel",
    "PermissionStatus",
    "PushInteraction",
    "PushPlatform",
    "ReceivedPush",
]


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True)
class NotificationChannel:
    """Delivery channel declaration required by some platforms before display."""

    id: str = "default"
    name: str = "default"
    importance: str = "max"
    vibration_pattern: tuple[int, ...] = (0, 250, 250, 250)
    light_color: str = "#FF231F7C"


@dataclass(frozen=True)
class ReceivedPush:
    """A notification delivered to the app while it is in the foreground."""

    identifier: str
    title: str | None
    body: str | None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PushInteraction:
    """The user tapped (or otherwise acted on) a displayed notification."""

    identifier: str
    data: dict[str, Any] = field(default_factory=dict)
    action: str = "default"


@runtime_checkable
class PushPlatform(Protocol):
    """Port: host platform push capability."""

    @property
    def is_physical_device(self) -> bool: ...

    @property
    def requires_channel(self) -> bool: ...

    @property
    def received(self) -> EventStream[ReceivedPush]: ...

    @property
    def interacted(self) -> EventStream[PushInteraction]: ...

    async def get_permission_status(self) -> PermissionStatus: ...

    async def request_permission(self) -> PermissionStatus: ...

    async def get_push_token(self, project_id: str | None) -> str: ...

    async def set_notification_channel(self, channel: NotificationChannel) -> None: ...

    async def schedule_notification(self, title: str, body: str, data: dict[str, Any]) -> str:
        """Display a notification immediately; returns the platform identifier."""
        ...


class InMemoryPushPlatform:
    """Fake PushPlatform.

    ``token_delay`` makes token acquisition hang for that many seconds and
    ``token_error`` makes it raise.  With ``echo_scheduled`` every scheduled
    notification is also delivered through :attr:`received`, the way a
    foreground app sees its own local notifications.
    """

    def __init__(
        self,
        *,
        token: str = "ExponentPushToken[in-memory]",
        physical_device: bool = True,
        requires_channel: bool = True,
        permission: PermissionStatus = PermissionStatus.GRANTED,
        grant_on_request: bool = True,
        token_delay: float | None = None,
        token_error: Exception | None = None,
        echo_scheduled: bool = False,
    ) -> None:
        self.token = token
        self.physical_device = physical_device
        self._requires_channel = requires_channel
        self.permission = permission
        self.grant_on_request = grant_on_request
        self.token_delay = token_delay
        self.token_error = token_error
        self.echo_scheduled = echo_scheduled
        self.channels: dict[str, NotificationChannel] = {}
        self.scheduled: list[tuple[str, str, str, dict[str, Any]]] = []
        self.permission_requests = 0
        self.token_requests: list[str | None] = []
        self._ids = itertools.count(1)
        self._received: EventStream[ReceivedPush] = EventStream("received")
        self._interacted: EventStream[PushInteraction] = EventStream("interacted")

    @property
    def is_physical_device(self) -> bool:
        return self.physical_device

    @property
    def requires_channel(self) -> bool:
        return self._requires_channel

    @property
    def received(self) -> EventStream[ReceivedPush]:
        return self._received

    @property
    def interacted(self) -> EventStream[PushInteraction]:
        return self._interacted

    async def get_permission_status(self) -> PermissionStatus:
        return self.permission

    async def request_permission(self) -> PermissionStatus:
        self.permission_requests += 1
        if self.grant_on_request:
            self.permission = PermissionStatus.GRANTED
        elif self.permission == PermissionStatus.UNDETERMINED:
            self.permission = PermissionStatus.DENIED
        return self.permission

    async def get_push_token(self, project_id: str | None) -> str:
        self.token_requests.append(project_id)
        if self.token_delay is not None:
            await asyncio.sleep(self.token_delay)
        if self.token_error is not None:
            raise self.token_error
        return self.token

    async def set_notification_channel(self, channel: NotificationChannel) -> None:
        self.channels[channel.id] = channel

    async def schedule_notification(self, title: str, body: str, data: dict[str, Any]) -> str:
        identifier = f"local-{next(self._ids)}"
        self.scheduled.append((identifier, title, body, dict(data)))
        if self.echo_scheduled:
            await self._received.emit(ReceivedPush(identifier, title, body, dict(data)))
        return identifier

    async def deliver(self, push: ReceivedPush) -> None:
        """Simulate a gateway push arriving while the app is in the foreground."""
        await self._received.emit(push)

    async def interact(self, interaction: PushInteraction) -> None:
        await self._interacted.emit(interaction)
