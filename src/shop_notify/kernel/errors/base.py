"""Root error class for the shop-notify error hierarchy.

Every error carries a ``code`` slug and a ``detail`` dict.  Log calls use
:meth:`BaseError.log_fields` (or :func:`describe_error` for arbitrary
exceptions) so structlog events get flat ``error_code`` / ``error`` keys
instead of a nested JSON blob.
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description, shown to admins in diagnostics.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra context such as user ids or gateway codes.
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def log_fields(self) -> dict[str, Any]:
        """Flat key/values for a structlog event; detail keys never override the error keys."""
        fields: dict[str, Any] = {k: v for k, v in self.detail.items() if k not in ("error", "error_code")}
        fields["error_code"] = self.code
        fields["error"] = self.message
        return fields


def describe_error(exc: BaseException) -> str:
    """Return the human-readable text of *exc*: ``message`` for our errors, ``str()`` otherwise."""
    if isinstance(exc, BaseError):
        return exc.message
    return str(exc) or type(exc).__name__


__all__ = ["BaseError", "describe_error"]
