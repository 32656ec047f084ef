"""Application events – subscribable in-process event streams.

Platform callbacks (foreground receive, user interaction) and identity
changes are modelled as explicit streams: a consumer registers a handler,
keeps the returned :class:`Subscription`, and removes it on shutdown.

Example::

    stream: EventStream[ReceivedPush] = EventStream("received")
    sub = stream.subscribe(ledger.handle_received)
    await stream.emit(push)
    sub.remove()
"""
from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Generic, TypeVar

from shop_notify.kernel.errors import describe_error
from shop_notify.observability.logging import get_logger

__all__ = ["EventStream", "Handler", "Subscription"]

T = TypeVar("T")

#: A handler may be a plain function or a coroutine function.
Handler = Callable[[T], "Awaitable[None] | None"]

logger = get_logger(__name__)


class Subscription:
    """Handle returned by :meth:`EventStream.subscribe`."""

    def __init__(self, stream: "EventStream[Any]", handler: Callable[[Any], Any]) -> None:
        self._stream = stream
        self._handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def remove(self) -> None:
        """Detach the handler; calling twice is a no-op."""
        if self._active:
            self._stream._detach(self._handler)
            self._active = False


class EventStream(Generic[T]):
    """Ordered fan-out of values to registered handlers."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[[T], Any]] = []

    def subscribe(self, handler: Callable[[T], Any]) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def _detach(self, handler: Callable[[T], Any]) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    async def emit(self, value: T) -> None:
        # Snapshot so a handler may unsubscribe itself mid-emit.
        for handler in list(self._handlers):
            try:
                result = handler(value)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:  # noqa: BLE001
                logger.error("event_stream.handler_failed", stream=self.name, error=describe_error(exc))
