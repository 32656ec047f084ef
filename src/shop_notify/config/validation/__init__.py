"""Config validation – error types."""
from shop_notify.config.validation.errors import (
    REDACTED,
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["REDACTED", "ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
