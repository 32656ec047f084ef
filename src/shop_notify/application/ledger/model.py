"""Application ledger – LocalNotification entry."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shop_notify.kernel.errors import SerializationError

__all__ = ["LocalNotification", "NotificationType"]


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    ORDER = "order"
    BROADCAST = "broadcast"
    ADMIN_ALERT = "admin_alert"


@dataclass(frozen=True)
class LocalNotification:
    """One in-app notification; ``type`` keeps unknown values as plain strings."""

    id: str
    title: str | None
    message: str | None
    type: str = NotificationType.INFO.value
    params: dict[str, Any] = field(default_factory=dict)
    time: str = ""
    read: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "params": dict(self.params),
            "time": self.time,
            "read": self.read,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocalNotification":
        if not isinstance(data, dict) or not data.get("id"):
            raise SerializationError("Ledger entry has no id", payload_type="LocalNotification")
        return cls(
            id=str(data["id"]),
            title=data.get("title"),
            message=data.get("message"),
            type=str(data.get("type") or NotificationType.INFO.value),
            params=dict(data.get("params") or {}),
            time=str(data.get("time") or ""),
            read=bool(data.get("read", False)),
        )
