"""Application-layer errors – registration and dispatch preconditions."""

from __future__ import annotations

from typing import Any

from shop_notify.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Use-case level failure."""

    default_code = "application_error"


class TimeoutError(ApplicationError):  # noqa: A001
    """An operation lost its race against a timer."""

    default_code = "timeout"


class RegistrationError(ApplicationError):
    """The platform refused or failed to hand out a push token."""

    default_code = "registration_failed"

    def __init__(self, message: str, *, reason: str = "platform_error", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.reason = reason
        self.detail.setdefault("reason", reason)


class NoReachableDevicesError(ApplicationError):
    """A broadcast was requested while no device holds a token."""

    default_code = "no_reachable_devices"

    def __init__(self, message: str = "No registered devices can receive a broadcast", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "NoReachableDevicesError",
    "RegistrationError",
    "TimeoutError",
]
