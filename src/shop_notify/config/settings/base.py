"""Config settings – Settings base class and ``SHOP_NOTIFY_*`` key mapping."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from shop_notify.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for env-driven settings.

    Field ``token_timeout_seconds`` of a class with ``_prefix = "SHOP_NOTIFY"``
    is read from ``SHOP_NOTIFY_TOKEN_TIMEOUT_SECONDS``; :meth:`env_key` is the
    one place that mapping lives, so the loader and ``_validate`` report the
    same variable name.  Fields listed in ``_secret_fields`` are masked in
    error messages.
    """

    _prefix: ClassVar[str] = "SHOP_NOTIFY"
    _secret_fields: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    @classmethod
    def invalid(cls, field_name: str, value: object, reason: str) -> InvalidSettingValueError:
        """Build the error for *field_name*, keyed by its environment variable."""
        return InvalidSettingValueError(
            cls.env_key(field_name),
            value,
            reason,
            field=field_name,
            secret=field_name in cls._secret_fields,
        )


__all__ = ["Settings"]
