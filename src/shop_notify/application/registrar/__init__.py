"""Application registrar – push token acquisition and Token Store sync."""
from shop_notify.application.registrar.platform import (
    InMemoryPushPlatform,
    NotificationChannel,
    PermissionStatus,
    PushInteraction,
    PushPlatform,
    ReceivedPush,
)
from shop_notify.application.registrar.registrar import RegistrationResult, TokenRegistrar

__all__ = [
    "InMemoryPushPlatform",
    "NotificationChannel",
    "PermissionStatus",
    "PushInteraction",
    "PushPlatform",
    "ReceivedPush",
    "RegistrationResult",
    "TokenRegistrar",
]
