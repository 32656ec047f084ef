"""Application tokens – TokenStore protocol + InMemory impl."""
from __future__ import annotations

import copy
from typing import Any, Iterable, Protocol, runtime_checkable

from shop_notify.application.tokens.model import DeviceToken
from shop_notify.kernel.roles import Role
from shop_notify.kernel.time import Clock, SystemClock

__all__ = ["InMemoryTokenStore", "TokenStore", "tokens_of"]


@runtime_checkable
class TokenStore(Protocol):
    """Port: durable user id -> device token mapping.

    ``upsert`` merges: fields absent from *fields* are left untouched and
    ``updatedAt`` is assigned by the store on every write.
    """

    async def upsert(self, user_id: str, fields: dict[str, Any]) -> None: ...
    async def get(self, user_id: str) -> DeviceToken | None: ...
    async def all(self) -> list[DeviceToken]: ...
    async def find_by_roles(self, roles: Iterable[Role | str]) -> list[DeviceToken]: ...
    async def count(self) -> int: ...


class InMemoryTokenStore:
    """Fake TokenStore keyed by user id."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._rows: dict[str, dict[str, Any]] = {}

    async def upsert(self, user_id: str, fields: dict[str, Any]) -> None:
        row = self._rows.setdefault(user_id, {})
        row.update(copy.deepcopy(fields))
        row["updatedAt"] = self._clock.now()

    async def get(self, user_id: str) -> DeviceToken | None:
        row = self._rows.get(user_id)
        return DeviceToken.from_fields(user_id, row) if row is not None else None

    async def all(self) -> list[DeviceToken]:
        return [DeviceToken.from_fields(uid, row) for uid, row in self._rows.items()]

    async def find_by_roles(self, roles: Iterable[Role | str]) -> list[DeviceToken]:
        wanted = {r.value if isinstance(r, Role) else r for r in roles}
        return [
            DeviceToken.from_fields(uid, row)
            for uid, row in self._rows.items()
            if row.get("role") in wanted
        ]

    async def count(self) -> int:
        return len(self._rows)

    def raw(self, user_id: str) -> dict[str, Any] | None:
        """Stored fields for *user_id* (test inspection helper)."""
        row = self._rows.get(user_id)
        return dict(row) if row is not None else None


def tokens_of(rows: Iterable[DeviceToken]) -> list[str]:
    """Non-empty tokens of *rows*, in row order."""
    return [row.token for row in rows if row.token]
