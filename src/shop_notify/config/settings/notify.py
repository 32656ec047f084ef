"""Config settings – NotifySettings for the notification subsystem."""
from __future__ import annotations

import dataclasses
from typing import ClassVar
import logging

from shop_notify.config.settings.base import Settings

EXPO_PUSH_URL = "https://exp.host/--/api/v2/push/send"


@dataclasses.dataclass
class NotifySettings(Settings):
    """Runtime configuration, loaded from ``SHOP_NOTIFY_*`` environment variables."""

    _secret_fields: ClassVar[frozenset[str]] = frozenset(
        {"gateway_access_token", "mongo_uri", "redis_url"}
    )

    gateway_url: str = EXPO_PUSH_URL
    gateway_access_token: str = ""
    gateway_timeout_seconds: float = 10.0
    token_timeout_seconds: float = 5.0
    project_id: str = ""
    channel_id: str = "default"
    channel_name: str = "default"
    ledger_key_prefix: str = "@shop_notifications_"
    admin_title_prefix: str = "🚨 [Admin] "
    admin_feed_limit: int = 50
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "shop"
    redis_url: str = "redis://localhost:6379/0"
    log_level: str = "INFO"

    def _validate(self) -> None:
        for name in ("gateway_timeout_seconds", "token_timeout_seconds"):
            value = getattr(self, name)
            if value <= 0:
                raise self.invalid(name, value, "must be greater than zero")
        if self.admin_feed_limit < 1:
            raise self.invalid("admin_feed_limit", self.admin_feed_limit, "must be at least 1")
        if not self.channel_id:
            raise self.invalid("channel_id", self.channel_id, "must not be empty")
        if not self.gateway_url.startswith(("https://", "http://")):
            raise self.invalid("gateway_url", self.gateway_url, "must be an http(s) URL")
        if self.mongo_uri and not self.mongo_uri.startswith(("mongodb://", "mongodb+srv://")):
            raise self.invalid("mongo_uri", self.mongo_uri, "must be a mongodb:// or mongodb+srv:// URI")
        if self.redis_url and not self.redis_url.startswith(("redis://", "rediss://", "unix://")):
            raise self.invalid("redis_url", self.redis_url, "must be a redis://, rediss:// or unix:// URL")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise self.invalid("log_level", self.log_level, "unknown logging level")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["EXPO_PUSH_URL", "NotifySettings"]
