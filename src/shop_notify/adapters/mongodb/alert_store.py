"""MongoDB adapter – MongoAdminAlertStore."""
from __future__ import annotations

import uuid
from typing import Any

from shop_notify.application.alerts import AdminAlertRecord
from shop_notify.kernel.errors import NotFoundError


class MongoAdminAlertStore:
    """AdminAlertStore over the ``admin_alerts`` collection.

    ``readBy`` is only ever extended with ``$addToSet``; ``createdAt`` is
    stamped by the server so the feed orders by one clock.
    """

    COLLECTION_NAME = "admin_alerts"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    @classmethod
    async def create_indexes(cls, collection: Any) -> None:
        await collection.create_index([("createdAt", -1)], name="idx_created_at")

    async def create(self, record: AdminAlertRecord) -> str:
        alert_id = record.id or uuid.uuid4().hex
        await self._col.update_one(
            {"_id": alert_id},
            {
                "$setOnInsert": {
                    "type": record.type,
                    "title": record.title,
                    "body": record.body,
                    "data": dict(record.data),
                    "readBy": sorted(record.read_by),
                },
                "$currentDate": {"createdAt": True},
            },
            upsert=True,
        )
        return alert_id

    async def recent(self, limit: int) -> list[AdminAlertRecord]:
        cursor = self._col.find({}, sort=[("createdAt", -1)], limit=limit)
        return [self._from_doc(doc) async for doc in cursor]

    async def mark_read(self, alert_id: str, user_id: str) -> None:
        result = await self._col.update_one(
            {"_id": alert_id}, {"$addToSet": {"readBy": user_id}}
        )
        if not result.matched_count:
            raise NotFoundError("AdminAlertRecord", alert_id)

    def _from_doc(self, doc: dict[str, Any]) -> AdminAlertRecord:
        return AdminAlertRecord(
            id=str(doc["_id"]),
            type=doc.get("type", ""),
            title=doc.get("title", ""),
            body=doc.get("body", ""),
            data=doc.get("data") or {},
            read_by=frozenset(doc.get("readBy") or ()),
            created_at=doc.get("createdAt"),
        )


__all__ = ["MongoAdminAlertStore"]
