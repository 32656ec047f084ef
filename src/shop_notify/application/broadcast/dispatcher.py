"""Application broadcast – BroadcastDispatcher.

Fans one message out to every device that holds a token.  The batched
gateway call is fire-and-forget: per-token gateway outcomes are not
inspected, so a device that stopped accepting pushes still counts towards
``count``.  This differs from the diagnostics test send, which surfaces the
gateway's per-message error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shop_notify.application.broadcast.record import BroadcastRecord, BroadcastRecordStore
from shop_notify.application.gateway import PushGateway, build_messages
from shop_notify.application.tokens import TokenStore, tokens_of
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import BaseError, ValidationError, describe_error
from shop_notify.observability.logging import get_logger

__all__ = ["BroadcastDispatcher", "BroadcastResult"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class BroadcastResult:
    success: bool
    count: int
    broadcast_id: str | None = None


class BroadcastDispatcher:
    def __init__(
        self,
        store: TokenStore,
        records: BroadcastRecordStore,
        gateway: PushGateway,
        settings: NotifySettings | None = None,
    ) -> None:
        self._store = store
        self._records = records
        self._gateway = gateway
        self._settings = settings or NotifySettings()

    async def send_broadcast(
        self,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> BroadcastResult:
        """Deliver to every token; gateway and store failures propagate.

        Raises
        ------
        ValidationError
            When *title* or *body* is blank (nothing is persisted).
        GatewayError
            When the batched call fails; the record stays ``pending``.
        """
        errors = [
            {"field": name, "error": "required"}
            for name, value in (("title", title), ("body", body))
            if not value or not value.strip()
        ]
        if errors:
            raise ValidationError("Broadcast title and body are required", errors=errors)

        payload = {**(data or {}), "type": "broadcast"}
        record_id = await self._records.create(BroadcastRecord(title=title, body=body, data=payload))
        log = logger.bind(broadcast_id=record_id)

        try:
            tokens = tokens_of(await self._store.all())
            if tokens:
                messages = build_messages(
                    tokens,
                    title,
                    body,
                    {**payload, "isRemote": True},
                    channel_id=self._settings.channel_id,
                )
                await self._gateway.send_batch(messages)
            await self._records.mark_sent(record_id)
        except Exception as exc:
            fields = exc.log_fields() if isinstance(exc, BaseError) else {"error": describe_error(exc)}
            log.error("broadcast.failed", **fields)
            raise

        log.info("broadcast.sent", count=len(tokens))
        return BroadcastResult(success=True, count=len(tokens), broadcast_id=record_id)
