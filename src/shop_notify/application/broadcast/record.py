"""Application broadcast – BroadcastRecord + BroadcastRecordStore protocol and InMemory impl."""
from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from shop_notify.kernel.errors import NotFoundError
from shop_notify.kernel.time import Clock, SystemClock

__all__ = [
    "BroadcastRecord",
    "BroadcastRecordStore",
    "BroadcastStatus",
    "InMemoryBroadcastStore",
]


class BroadcastStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"


@dataclass(frozen=True)
class BroadcastRecord:
    """Audit row of one broadcast; stays ``pending`` if the fan-out call failed."""

    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    status: BroadcastStatus = BroadcastStatus.PENDING
    sent_at: datetime | None = None
    id: str = ""


@runtime_checkable
class BroadcastRecordStore(Protocol):
    async def create(self, record: BroadcastRecord) -> str:
        """Persist *record*; returns the store-assigned id."""
        ...

    async def mark_sent(self, record_id: str) -> None: ...

    async def get(self, record_id: str) -> BroadcastRecord | None: ...


class InMemoryBroadcastStore:
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._records: dict[str, BroadcastRecord] = {}

    async def create(self, record: BroadcastRecord) -> str:
        record_id = record.id or uuid.uuid4().hex
        self._records[record_id] = dataclasses.replace(
            record, id=record_id, sent_at=self._clock.now()
        )
        return record_id

    async def mark_sent(self, record_id: str) -> None:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError("BroadcastRecord", record_id)
        self._records[record_id] = dataclasses.replace(record, status=BroadcastStatus.SENT)

    async def get(self, record_id: str) -> BroadcastRecord | None:
        return self._records.get(record_id)

    def all(self) -> list[BroadcastRecord]:
        return list(self._records.values())
