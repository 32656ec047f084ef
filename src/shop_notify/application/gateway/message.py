"""Application gateway – outbound push message and per-message ticket."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["PushMessage", "PushTicket", "build_messages", "parse_ticket"]


@dataclass(frozen=True)
class PushMessage:
    """A single gateway message addressed to one device token."""

    to: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    priority: str = "high"
    sound: str = "default"
    channel_id: str = "default"

    def to_payload(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "title": self.title,
            "body": self.body,
            "data": dict(self.data),
            "priority": self.priority,
            "sound": self.sound,
            "channelId": self.channel_id,
        }


@dataclass(frozen=True)
class PushTicket:
    """The gateway's structured result for one submitted message."""

    status: str
    message: str | None = None
    code: str | None = None
    id: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def describe(self) -> str:
        """Gateway error text verbatim, e.g. ``"DeviceNotRegistered (X)"``."""
        text = self.message or self.status
        return f"{text} ({self.code})" if self.code else text


def parse_ticket(body: Any) -> PushTicket:
    """Extract the ticket from ``{"data": {...}}`` or ``{"data": [{...}]}``."""
    data = body.get("data") if isinstance(body, dict) else None
    if isinstance(data, list):
        data = data[0] if data else None
    if not isinstance(data, dict):
        errors = body.get("errors") if isinstance(body, dict) else None
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            first = errors[0]
            return PushTicket(status="error", message=first.get("message"), code=first.get("code"))
        return PushTicket(status="error", message="Malformed gateway response")
    code = data.get("code")
    details = data.get("details")
    if code is None and isinstance(details, dict):
        code = details.get("error")
    return PushTicket(
        status=str(data.get("status", "error")),
        message=data.get("message"),
        code=code,
        id=data.get("id"),
    )


def build_messages(
    tokens: list[str],
    title: str,
    body: str,
    data: dict[str, Any],
    *,
    channel_id: str = "default",
) -> list[PushMessage]:
    """One high-priority message per token, all sharing the same content."""
    return [
        PushMessage(to=token, title=title, body=body, data=dict(data), channel_id=channel_id)
        for token in tokens
    ]
