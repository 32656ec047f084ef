"""Redis adapter – RedisLedgerStorage."""
from __future__ import annotations

import json
from typing import Any

from shop_notify.kernel.errors import PersistenceError, SerializationError


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'shop-notify[redis]' to use the Redis adapter") from exc


class RedisLedgerStorage:
    """LedgerStorage keeping each user's list as one JSON string value."""

    def __init__(self, url: str, **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._client = aioredis.from_url(url, **kwargs)

    async def get(self, key: str) -> list[dict[str, Any]] | None:
        try:
            blob = await self._client.get(key)
        except Exception as exc:  # noqa: BLE001
            raise PersistenceError("ledger-storage", str(exc)) from exc
        if blob is None:
            return None
        try:
            value = json.loads(blob)
        except ValueError as exc:
            raise SerializationError(f"Stored ledger under {key!r} is not valid JSON", payload_type="list") from exc
        if not isinstance(value, list):
            raise SerializationError(f"Stored ledger under {key!r} is not a list", payload_type="list")
        return value

    async def set(self, key: str, value: list[dict[str, Any]]) -> None:
        blob = json.dumps(value, ensure_ascii=False)
        try:
            await self._client.set(key, blob)
        except Exception as exc:  # noqa: BLE001
            raise PersistenceError("ledger-storage", str(exc)) from exc

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisLedgerStorage"]
