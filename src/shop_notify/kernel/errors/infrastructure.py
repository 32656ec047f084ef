"""Infrastructure errors – document store, local storage and push gateway."""

from __future__ import annotations

from typing import Any

from shop_notify.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class PersistenceError(InfrastructureError):
    """A store (token rows, records, per-user storage) could not be reached."""

    default_code = "persistence_error"

    def __init__(self, resource: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Could not persist to '{resource}'", **kwargs)
        self.resource = resource


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(self, message: str, *, payload_type: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class GatewayError(InfrastructureError):
    """The push gateway could not be reached or answered with an error status."""

    default_code = "gateway_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Push gateway '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code
        if status_code is not None:
            self.detail.setdefault("status_code", status_code)


__all__ = [
    "GatewayError",
    "InfrastructureError",
    "PersistenceError",
    "SerializationError",
]
