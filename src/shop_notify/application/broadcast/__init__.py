"""Application broadcast – fan-out to every registered device."""
from shop_notify.application.broadcast.dispatcher import BroadcastDispatcher, BroadcastResult
from shop_notify.application.broadcast.record import (
    BroadcastRecord,
    BroadcastRecordStore,
    BroadcastStatus,
    InMemoryBroadcastStore,
)

__all__ = [
    "BroadcastDispatcher",
    "BroadcastRecord",
    "BroadcastRecordStore",
    "BroadcastResult",
    "BroadcastStatus",
    "InMemoryBroadcastStore",
]
