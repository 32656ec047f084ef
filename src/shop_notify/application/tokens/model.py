"""Application tokens – DeviceToken row and device metadata."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from shop_notify.kernel.roles import Role

__all__ = ["DeviceMetadata", "DeviceToken"]


@dataclass(frozen=True)
class DeviceMetadata:
    """Non-authoritative device description sent along with a token."""

    platform: str | None = None
    device_model: str | None = None
    email: str | None = None
    display_name: str | None = None
    last_active: str | None = None

    def to_fields(self) -> dict[str, Any]:
        """Stored-field dict with ``None`` values dropped so a merge keeps old ones."""
        values = {
            "platform": self.platform,
            "deviceModel": self.device_model,
            "email": self.email,
            "displayName": self.display_name,
            "lastActive": self.last_active,
        }
        return {k: v for k, v in values.items() if v is not None}


@dataclass(frozen=True)
class DeviceToken:
    """One row per user id; ``role`` is a snapshot taken at the last sync."""

    user_id: str
    token: str | None = None
    role: str | None = None
    platform: str | None = None
    device_model: str | None = None
    email: str | None = None
    display_name: str | None = None
    last_active: str | None = None
    updated_at: datetime | None = None

    @property
    def parsed_role(self) -> Role | None:
        return Role.parse(self.role)

    @classmethod
    def from_fields(cls, user_id: str, fields: dict[str, Any]) -> "DeviceToken":
        return cls(
            user_id=user_id,
            token=fields.get("token") or None,
            role=fields.get("role"),
            platform=fields.get("platform"),
            device_model=fields.get("deviceModel"),
            email=fields.get("email"),
            display_name=fields.get("displayName"),
            last_active=fields.get("lastActive"),
            updated_at=fields.get("updatedAt"),
        )
