"""MongoDB adapter – database handle from settings."""
from __future__ import annotations

from typing import Any

from shop_notify.config import MissingRequiredSettingError, NotifySettings

__all__ = ["open_database"]


def _require_motor() -> Any:
    try:
        import motor.motor_asyncio as motor_asyncio
        return motor_asyncio
    except ImportError as exc:
        raise ImportError("Install 'shop-notify[mongodb]' to use the MongoDB adapter") from exc


def open_database(settings: NotifySettings) -> Any:
    """Return the motor database named by ``settings.mongo_database``."""
    if not settings.mongo_uri:
        raise MissingRequiredSettingError(settings.env_key("mongo_uri"), field="mongo_uri")
    motor_asyncio = _require_motor()
    client = motor_asyncio.AsyncIOMotorClient(settings.mongo_uri)
    return client[settings.mongo_database]
