"""Kernel roles – authorization roles snapshotted onto token rows."""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    MANAGER = "manager"
    SUPPORT = "support"

    @classmethod
    def parse(cls, value: "Role | str | None") -> "Role | None":
        """Return the matching role, or ``None`` for unknown/absent values."""
        if isinstance(value, Role):
            return value
        if not value:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


#: Roles allowed to receive administrative alerts.
ELEVATED_ROLES: frozenset[Role] = frozenset(
    {Role.ADMIN, Role.SUPER_ADMIN, Role.MANAGER, Role.SUPPORT}
)


def is_elevated(role: Role | str | None) -> bool:
    parsed = Role.parse(role)
    return parsed is not None and parsed in ELEVATED_ROLES


__all__ = ["ELEVATED_ROLES", "Role", "is_elevated"]
