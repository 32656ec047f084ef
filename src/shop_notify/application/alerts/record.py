"""Application alerts – AdminAlertRecord + AdminAlertStore protocol and InMemory impl."""
from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from shop_notify.kernel.errors import NotFoundError
from shop_notify.kernel.time import Clock, SystemClock

__all__ = ["AdminAlertRecord", "AdminAlertStore", "AlertType", "InMemoryAdminAlertStore"]


class AlertType(str, Enum):
    ORDER = "order"
    USER = "user"
    SYSTEM = "system"


@dataclass(frozen=True)
class AdminAlertRecord:
    """Entry of the in-app admin feed; ``read_by`` only ever grows."""

    type: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    read_by: frozenset[str] = frozenset()
    created_at: datetime | None = None
    id: str = ""


@runtime_checkable
class AdminAlertStore(Protocol):
    async def create(self, record: AdminAlertRecord) -> str: ...

    async def recent(self, limit: int) -> list[AdminAlertRecord]:
        """Newest first."""
        ...

    async def mark_read(self, alert_id: str, user_id: str) -> None: ...


class InMemoryAdminAlertStore:
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._records: dict[str, AdminAlertRecord] = {}
        self._order: list[str] = []

    async def create(self, record: AdminAlertRecord) -> str:
        alert_id = record.id or uuid.uuid4().hex
        self._records[alert_id] = dataclasses.replace(
            record, id=alert_id, created_at=self._clock.now()
        )
        self._order.append(alert_id)
        return alert_id

    async def recent(self, limit: int) -> list[AdminAlertRecord]:
        newest_first = reversed(self._order)
        return [self._records[alert_id] for alert_id in newest_first][:limit]

    async def mark_read(self, alert_id: str, user_id: str) -> None:
        record = self._records.get(alert_id)
        if record is None:
            raise NotFoundError("AdminAlertRecord", alert_id)
        self._records[alert_id] = dataclasses.replace(record, read_by=record.read_by | {user_id})

    def all(self) -> list[AdminAlertRecord]:
        return [self._records[alert_id] for alert_id in self._order]
