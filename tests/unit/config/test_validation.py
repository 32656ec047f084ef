"""Unit tests for config validation errors."""

from __future__ import annotations

import pytest

from shop_notify.config.validation import (
    REDACTED,
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from shop_notify.kernel.errors import ApplicationError


class TestConfigError:
    def test_is_application_error(self) -> None:
        assert isinstance(ConfigError("something went wrong"), ApplicationError)

    def test_default_code(self) -> None:
        assert ConfigError("bad").code == "config_error"

    def test_caught_as_application_error(self) -> None:
        with pytest.raises(ApplicationError):
            raise ConfigError("test")


class TestMissingRequiredSettingError:
    def test_fields(self) -> None:
        err = MissingRequiredSettingError("SHOP_NOTIFY_MONGO_URI")
        assert err.setting_name == "SHOP_NOTIFY_MONGO_URI"
        assert err.code == "missing_required_setting"
        assert "SHOP_NOTIFY_MONGO_URI" in err.message

    def test_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            raise MissingRequiredSettingError("X")


class TestInvalidSettingValueError:
    def test_fields(self) -> None:
        err = InvalidSettingValueError("admin_feed_limit", 0, "must be at least 1")
        assert err.setting_name == "admin_feed_limit"
        assert err.value == 0
        assert err.reason == "must be at least 1"
        assert err.code == "invalid_setting_value"
        assert "admin_feed_limit" in err.message

    def test_field_and_detail(self) -> None:
        err = InvalidSettingValueError(
            "SHOP_NOTIFY_TOKEN_TIMEOUT_SECONDS", -1.0, "must be greater than zero", field="token_timeout_seconds"
        )
        assert err.field == "token_timeout_seconds"
        assert err.detail["setting"] == "SHOP_NOTIFY_TOKEN_TIMEOUT_SECONDS"
        assert "-1.0" in err.message

    def test_secret_value_redacted(self) -> None:
        err = InvalidSettingValueError("SHOP_NOTIFY_REDIS_URL", "tcp://:pw@host", "bad scheme", secret=True)
        assert "pw@host" not in err.message
        assert REDACTED in err.message
        assert err.value == "tcp://:pw@host"
