"""Application identity – signed-in user and role lookup."""
from shop_notify.application.identity.model import Identity
from shop_notify.application.identity.ports import (
    IdentityProvider,
    InMemoryIdentityService,
    RoleDirectory,
)

__all__ = ["Identity", "IdentityProvider", "InMemoryIdentityService", "RoleDirectory"]
