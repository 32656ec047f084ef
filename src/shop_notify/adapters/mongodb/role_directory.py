"""MongoDB adapter – MongoRoleDirectory."""
from __future__ import annotations

from typing import Any, Iterable

from shop_notify.kernel.roles import Role


class MongoRoleDirectory:
    """RoleDirectory over the ``users`` collection (``role`` field per user).

    Unknown users and unrecognised role strings resolve to ``customer``.
    """

    COLLECTION_NAME = "users"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    async def get_role(self, user_id: str) -> Role:
        doc = await self._col.find_one({"_id": user_id}, projection={"role": 1})
        role = Role.parse(doc.get("role")) if doc else None
        return role or Role.CUSTOMER

    async def find_user_ids_with_roles(self, roles: Iterable[Role]) -> list[str]:
        wanted = sorted(Role(r).value for r in roles)
        cursor = self._col.find({"role": {"$in": wanted}}, projection={"_id": 1})
        return [str(doc["_id"]) async for doc in cursor]


__all__ = ["MongoRoleDirectory"]
