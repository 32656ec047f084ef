"""Config – 12-factor settings, loaders, and validation errors."""

from shop_notify.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    NotifySettings,
    Settings,
    SettingsLoader,
)
from shop_notify.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "NotifySettings",
    "Settings",
    "SettingsLoader",
]
