"""Application identity – identity provider and role directory ports + in-memory fake."""
from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from shop_notify.application.events import EventStream
from shop_notify.application.identity.model import Identity
from shop_notify.kernel.roles import Role

__all__ = ["IdentityProvider", "InMemoryIdentityService", "RoleDirectory"]


@runtime_checkable
class IdentityProvider(Protocol):
    """Port: current signed-in identity as a subscribable stream."""

    @property
    def current(self) -> Identity | None: ...

    @property
    def changes(self) -> EventStream[Identity | None]: ...


@runtime_checkable
class RoleDirectory(Protocol):
    """Port: authoritative role lookup."""

    async def get_role(self, user_id: str) -> Role: ...

    async def find_user_ids_with_roles(self, roles: Iterable[Role]) -> list[str]: ...


class InMemoryIdentityService:
    """Fake IdentityProvider + RoleDirectory for tests and local runs."""

    def __init__(self) -> None:
        self._current: Identity | None = None
        self._roles: dict[str, Role] = {}
        self._changes: EventStream[Identity | None] = EventStream("identity")

    @property
    def current(self) -> Identity | None:
        return self._current

    @property
    def changes(self) -> EventStream[Identity | None]:
        return self._changes

    async def sign_in(self, identity: Identity, role: Role | None = None) -> None:
        if role is not None:
            self._roles[identity.user_id] = role
        self._current = identity
        await self._changes.emit(identity)

    async def sign_out(self) -> None:
        self._current = None
        await self._changes.emit(None)

    def set_role(self, user_id: str, role: Role) -> None:
        self._roles[user_id] = role

    async def get_role(self, user_id: str) -> Role:
        return self._roles.get(user_id, Role.CUSTOMER)

    async def find_user_ids_with_roles(self, roles: Iterable[Role]) -> list[str]:
        wanted = set(roles)
        return [uid for uid, role in self._roles.items() if role in wanted]
