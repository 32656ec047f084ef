"""Config settings – 12-factor env-based configuration."""
from shop_notify.config.settings.base import Settings
from shop_notify.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from shop_notify.config.settings.notify import EXPO_PUSH_URL, NotifySettings

__all__ = [
    "DotenvSettingsLoader",
    "EXPO_PUSH_URL",
    "EnvSettingsLoader",
    "NotifySettings",
    "Settings",
    "SettingsLoader",
]
