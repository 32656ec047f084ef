"""Config validation errors.

Both setting errors name the environment variable an operator has to fix
(``SHOP_NOTIFY_TOKEN_TIMEOUT_SECONDS``) and, when known, the dataclass field
behind it.  Values of secret settings never reach the message.
"""
from __future__ import annotations

from shop_notify.kernel.errors import ApplicationError

REDACTED = "***"


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, field: str | None = None) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name
        self.field = field


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used, e.g. a non-positive timeout."""
    default_code = "invalid_setting_value"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        field: str | None = None,
        secret: bool = False,
    ) -> None:
        shown = REDACTED if secret else repr(value)
        super().__init__(
            f"Setting '{setting_name}' has invalid value {shown}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.field = field
        self.value = value
        self.reason = reason
        self.secret = secret


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError", "REDACTED"]
