"""MongoDB adapter – MongoTokenStore."""
from __future__ import annotations

from typing import Any, Iterable

from shop_notify.application.tokens import DeviceToken
from shop_notify.kernel.errors import PersistenceError
from shop_notify.kernel.roles import Role


class MongoTokenStore:
    """TokenStore over the ``user_tokens`` collection, one document per user id.

    Writes are ``$set`` merges with ``upsert=True``, so fields not named in
    an upsert keep their stored value.  ``updatedAt`` is assigned by the
    server through ``$currentDate``.
    """

    COLLECTION_NAME = "user_tokens"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    @classmethod
    async def create_indexes(cls, collection: Any) -> None:
        """Index on ``role`` for the admin fan-out query."""
        await collection.create_index([("role", 1)], name="idx_role")

    async def upsert(self, user_id: str, fields: dict[str, Any]) -> None:
        values = {k: v for k, v in fields.items() if k not in ("_id", "updatedAt")}
        try:
            await self._col.update_one(
                {"_id": user_id},
                {"$set": values, "$currentDate": {"updatedAt": True}},
                upsert=True,
            )
        except Exception as exc:  # noqa: BLE001
            raise PersistenceError(self.COLLECTION_NAME, str(exc)) from exc

    async def get(self, user_id: str) -> DeviceToken | None:
        doc = await self._col.find_one({"_id": user_id})
        return self._from_doc(doc) if doc is not None else None

    async def all(self) -> list[DeviceToken]:
        cursor = self._col.find({})
        return [self._from_doc(doc) async for doc in cursor]

    async def find_by_roles(self, roles: Iterable[Role | str]) -> list[DeviceToken]:
        wanted = sorted({r.value if isinstance(r, Role) else r for r in roles})
        cursor = self._col.find({"role": {"$in": wanted}})
        return [self._from_doc(doc) async for doc in cursor]

    async def count(self) -> int:
        return int(await self._col.count_documents({}))

    def _from_doc(self, doc: dict[str, Any]) -> DeviceToken:
        return DeviceToken.from_fields(str(doc.get("userId") or doc["_id"]), doc)


__all__ = ["MongoTokenStore"]
