"""MongoDB adapter – MongoBroadcastStore."""
from __future__ import annotations

import uuid
from typing import Any

from shop_notify.application.broadcast import BroadcastRecord, BroadcastStatus
from shop_notify.kernel.errors import NotFoundError


class MongoBroadcastStore:
    """BroadcastRecordStore over the ``broadcasts`` collection."""

    COLLECTION_NAME = "broadcasts"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    async def create(self, record: BroadcastRecord) -> str:
        """Insert the record; ``sentAt`` is stamped by the server."""
        record_id = record.id or uuid.uuid4().hex
        await self._col.update_one(
            {"_id": record_id},
            {
                "$setOnInsert": {
                    "title": record.title,
                    "body": record.body,
                    "data": dict(record.data),
                    "status": BroadcastStatus(record.status).value,
                },
                "$currentDate": {"sentAt": True},
            },
            upsert=True,
        )
        return record_id

    async def mark_sent(self, record_id: str) -> None:
        result = await self._col.update_one(
            {"_id": record_id}, {"$set": {"status": BroadcastStatus.SENT.value}}
        )
        if not result.matched_count:
            raise NotFoundError("BroadcastRecord", record_id)

    async def get(self, record_id: str) -> BroadcastRecord | None:
        doc = await self._col.find_one({"_id": record_id})
        if doc is None:
            return None
        return BroadcastRecord(
            id=str(doc["_id"]),
            title=doc.get("title", ""),
            body=doc.get("body", ""),
            data=doc.get("data") or {},
            status=BroadcastStatus(doc.get("status", BroadcastStatus.PENDING.value)),
            sent_at=doc.get("sentAt"),
        )


__all__ = ["MongoBroadcastStore"]
