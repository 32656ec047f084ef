"""Application ledger – per-user LedgerStorage protocol + InMemory impl."""
from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from shop_notify.application.identity import Identity
from shop_notify.kernel.errors import PersistenceError

__all__ = ["InMemoryLedgerStorage", "LedgerStorage", "storage_key"]


@runtime_checkable
class LedgerStorage(Protocol):
    """Port: key-value persistence of a JSON-serialisable list per user."""

    async def get(self, key: str) -> list[dict[str, Any]] | None: ...

    async def set(self, key: str, value: list[dict[str, Any]]) -> None: ...


def storage_key(identity: Identity, prefix: str) -> str:
    """Deterministic per-user key: prefix + lower-cased email (user id if none)."""
    owner = identity.email.strip().lower() if identity.email else identity.user_id
    return f"{prefix}{owner}"


class InMemoryLedgerStorage:
    """Fake LedgerStorage that round-trips values through JSON."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}
        self.fail_writes = False
        self.writes: list[str] = []

    async def get(self, key: str) -> list[dict[str, Any]] | None:
        blob = self._blobs.get(key)
        return json.loads(blob) if blob is not None else None

    async def set(self, key: str, value: list[dict[str, Any]]) -> None:
        if self.fail_writes:
            raise PersistenceError("ledger-storage", f"write to {key!r} refused")
        self._blobs[key] = json.dumps(value, ensure_ascii=False)
        self.writes.append(key)

    def keys(self) -> list[str]:
        return list(self._blobs)
