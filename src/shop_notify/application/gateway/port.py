"""Application gateway – PushGateway protocol + in-memory fake."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from shop_notify.application.gateway.message import PushMessage, PushTicket

__all__ = ["InMemoryPushGateway", "PushGateway"]


@runtime_checkable
class PushGateway(Protocol):
    """Port: HTTP push gateway.

    ``send`` submits one message object and returns its ticket;
    ``send_batch`` submits an array in one call and does not inspect the
    per-message outcome.
    """

    async def send(self, message: PushMessage) -> PushTicket: ...

    async def send_batch(self, messages: list[PushMessage]) -> None: ...


class InMemoryPushGateway:
    """Fake PushGateway that captures submissions."""

    def __init__(self, ticket: PushTicket | None = None, error: Exception | None = None) -> None:
        self.ticket = ticket or PushTicket(status="ok")
        self.error = error
        self.batches: list[list[PushMessage]] = []
        self.singles: list[PushMessage] = []

    async def send(self, message: PushMessage) -> PushTicket:
        if self.error is not None:
            raise self.error
        self.singles.append(message)
        return self.ticket

    async def send_batch(self, messages: list[PushMessage]) -> None:
        if self.error is not None:
            raise self.error
        self.batches.append(list(messages))

    @property
    def messages(self) -> list[PushMessage]:
        """Every submitted message: batched ones first, then singles."""
        out: list[PushMessage] = []
        for batch in self.batches:
            out.extend(batch)
        out.extend(self.singles)
        return out

    def reset(self) -> None:
        self.batches.clear()
        self.singles.clear()
