"""Unit tests for MongoDB adapters: collections are AsyncMock doubles, no server required."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shop_notify.adapters.mongodb import (
    MongoAdminAlertStore,
    MongoBroadcastStore,
    MongoRoleDirectory,
    MongoTokenStore,
    open_database,
)
from shop_notify.application.alerts import AdminAlertRecord, AdminAlertStore
from shop_notify.application.broadcast import BroadcastRecord, BroadcastRecordStore, BroadcastStatus
from shop_notify.application.identity import RoleDirectory
from shop_notify.application.tokens import TokenStore
from shop_notify.config import MissingRequiredSettingError, NotifySettings
from shop_notify.kernel.errors import NotFoundError, PersistenceError
from shop_notify.kernel.roles import ELEVATED_ROLES, Role


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _Cursor:
    """Minimal async-iterable stand-in for a motor cursor."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = list(docs)

    def __aiter__(self) -> "_Cursor":
        return self

    async def __anext__(self) -> dict[str, Any]:
        if not self._docs:
            raise StopAsyncIteration
        return self._docs.pop(0)


def _collection(
    docs: list[dict[str, Any]] | None = None,
    find_one: dict[str, Any] | None = None,
    matched: int = 1,
) -> MagicMock:
    col = MagicMock()
    col.update_one = AsyncMock(return_value=MagicMock(matched_count=matched))
    col.insert_one = AsyncMock()
    col.find_one = AsyncMock(return_value=find_one)
    col.count_documents = AsyncMock(return_value=len(docs or []))
    col.create_index = AsyncMock()
    col.find = MagicMock(side_effect=lambda *a, **kw: _Cursor(docs or []))
    return col


# ---------------------------------------------------------------------------
# MongoTokenStore
# ---------------------------------------------------------------------------


class TestMongoTokenStore:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MongoTokenStore(_collection()), TokenStore)

    def test_upsert_merges_with_server_timestamp(self) -> None:
        col = _collection()

        async def run() -> None:
            await MongoTokenStore(col).upsert("u1", {"token": "T1", "role": "admin", "updatedAt": "ignored"})

        asyncio.run(run())
        col.update_one.assert_awaited_once_with(
            {"_id": "u1"},
            {"$set": {"token": "T1", "role": "admin"}, "$currentDate": {"updatedAt": True}},
            upsert=True,
        )

    def test_upsert_failure_is_persistence_error(self) -> None:
        col = _collection()
        col.update_one = AsyncMock(side_effect=RuntimeError("network"))

        async def run() -> None:
            with pytest.raises(PersistenceError):
                await MongoTokenStore(col).upsert("u1", {"token": "T1"})

        asyncio.run(run())

    def test_get_maps_document(self) -> None:
        stamp = datetime(2026, 1, 1, tzinfo=UTC)
        col = _collection(find_one={"_id": "u1", "token": "T1", "role": "manager",
                                    "deviceModel": "Pixel", "updatedAt": stamp})

        async def run() -> None:
            row = await MongoTokenStore(col).get("u1")
            assert row is not None
            assert row.user_id == "u1"
            assert row.parsed_role is Role.MANAGER
            assert row.device_model == "Pixel"
            assert row.updated_at == stamp

        asyncio.run(run())

    def test_get_missing(self) -> None:
        assert asyncio.run(MongoTokenStore(_collection()).get("nobody")) is None

    def test_find_by_roles_uses_in_filter(self) -> None:
        col = _collection(docs=[{"_id": "a", "token": "TA", "role": "admin"}])

        async def run() -> None:
            rows = await MongoTokenStore(col).find_by_roles(ELEVATED_ROLES)
            assert [r.token for r in rows] == ["TA"]

        asyncio.run(run())
        (query,), _ = col.find.call_args
        assert query == {"role": {"$in": ["admin", "manager", "super_admin", "support"]}}

    def test_all_and_count(self) -> None:
        col = _collection(docs=[{"_id": "a", "token": "TA"}, {"_id": "b"}])

        async def run() -> None:
            store = MongoTokenStore(col)
            assert [r.user_id for r in await store.all()] == ["a", "b"]
            assert await store.count() == 2

        asyncio.run(run())
        col.count_documents.assert_awaited_once_with({})

    def test_create_indexes(self) -> None:
        col = _collection()
        asyncio.run(MongoTokenStore.create_indexes(col))
        col.create_index.assert_awaited_once()


# ---------------------------------------------------------------------------
# MongoBroadcastStore
# ---------------------------------------------------------------------------


class TestMongoBroadcastStore:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MongoBroadcastStore(_collection()), BroadcastRecordStore)

    def test_create_upserts_pending_document_with_server_time(self) -> None:
        col = _collection()

        async def run() -> str:
            return await MongoBroadcastStore(col).create(
                BroadcastRecord(title="t", body="b", data={"type": "broadcast"})
            )

        record_id = asyncio.run(run())
        col.update_one.assert_awaited_once_with(
            {"_id": record_id},
            {
                "$setOnInsert": {
                    "title": "t",
                    "body": "b",
                    "data": {"type": "broadcast"},
                    "status": "pending",
                },
                "$currentDate": {"sentAt": True},
            },
            upsert=True,
        )
        col.insert_one.assert_not_awaited()

    def test_mark_sent(self) -> None:
        col = _collection()
        asyncio.run(MongoBroadcastStore(col).mark_sent("b1"))
        col.update_one.assert_awaited_once_with({"_id": "b1"}, {"$set": {"status": "sent"}})

    def test_mark_sent_unknown_raises(self) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(MongoBroadcastStore(_collection(matched=0)).mark_sent("missing"))

    def test_get_maps_document(self) -> None:
        col = _collection(find_one={"_id": "b1", "title": "t", "body": "b", "data": {}, "status": "sent"})
        record = asyncio.run(MongoBroadcastStore(col).get("b1"))
        assert record is not None
        assert record.status is BroadcastStatus.SENT


# ---------------------------------------------------------------------------
# MongoAdminAlertStore
# ---------------------------------------------------------------------------


class TestMongoAdminAlertStore:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MongoAdminAlertStore(_collection()), AdminAlertStore)

    def test_create_upserts_document_with_server_time(self) -> None:
        col = _collection()

        async def run() -> str:
            return await MongoAdminAlertStore(col).create(
                AdminAlertRecord(type="order", title="[Admin] New order", body="b")
            )

        alert_id = asyncio.run(run())
        (selector, update), kwargs = col.update_one.call_args
        assert selector == {"_id": alert_id}
        assert update["$setOnInsert"]["readBy"] == []
        assert update["$setOnInsert"]["title"] == "[Admin] New order"
        assert update["$currentDate"] == {"createdAt": True}
        assert "createdAt" not in update["$setOnInsert"]
        assert kwargs == {"upsert": True}

    def test_recent_sorts_newest_first_with_limit(self) -> None:
        col = _collection(docs=[{"_id": "a2", "type": "order", "title": "t", "body": "b", "readBy": ["U1"]}])
        records = asyncio.run(MongoAdminAlertStore(col).recent(50))
        assert records[0].read_by == {"U1"}
        _, kwargs = col.find.call_args
        assert kwargs == {"sort": [("createdAt", -1)], "limit": 50}

    def test_mark_read_adds_to_set(self) -> None:
        col = _collection()
        asyncio.run(MongoAdminAlertStore(col).mark_read("a1", "U1"))
        col.update_one.assert_awaited_once_with({"_id": "a1"}, {"$addToSet": {"readBy": "U1"}})

    def test_mark_read_unknown_raises(self) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(MongoAdminAlertStore(_collection(matched=0)).mark_read("missing", "U1"))


# ---------------------------------------------------------------------------
# MongoRoleDirectory
# ---------------------------------------------------------------------------


class TestMongoRoleDirectory:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MongoRoleDirectory(_collection()), RoleDirectory)

    def test_get_role(self) -> None:
        col = _collection(find_one={"_id": "u1", "role": "Admin"})
        assert asyncio.run(MongoRoleDirectory(col).get_role("u1")) is Role.ADMIN

    @pytest.mark.parametrize("doc", [None, {"_id": "u1"}, {"_id": "u1", "role": "owner"}])
    def test_unknown_defaults_to_customer(self, doc: dict[str, Any] | None) -> None:
        assert asyncio.run(MongoRoleDirectory(_collection(find_one=doc)).get_role("u1")) is Role.CUSTOMER

    def test_find_user_ids_with_roles(self) -> None:
        col = _collection(docs=[{"_id": "a"}, {"_id": "m"}])
        ids = asyncio.run(MongoRoleDirectory(col).find_user_ids_with_roles([Role.MANAGER, Role.ADMIN]))
        assert ids == ["a", "m"]
        (query,), _ = col.find.call_args
        assert query == {"role": {"$in": ["admin", "manager"]}}


# ---------------------------------------------------------------------------
# open_database
# ---------------------------------------------------------------------------


class TestOpenDatabase:
    def test_requires_uri(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            open_database(NotifySettings(mongo_uri=""))
        assert exc_info.value.setting_name == "SHOP_NOTIFY_MONGO_URI"
        assert exc_info.value.field == "mongo_uri"

    def test_selects_configured_database(self) -> None:
        import shop_notify.adapters.mongodb.client as client_mod

        client = MagicMock()
        motor_asyncio = MagicMock()
        motor_asyncio.AsyncIOMotorClient = MagicMock(return_value=client)
        with patch.object(client_mod, "_require_motor", return_value=motor_asyncio):
            open_database(NotifySettings(mongo_uri="mongodb://db:27017", mongo_database="shop"))
        motor_asyncio.AsyncIOMotorClient.assert_called_once_with("mongodb://db:27017")
        client.__getitem__.assert_called_once_with("shop")
