"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    ├── ApplicationError         (application.py)
    │   ├── TimeoutError
    │   ├── RegistrationError
    │   └── NoReachableDevicesError
    └── InfrastructureError      (infrastructure.py)
        ├── PersistenceError
        ├── SerializationError
        └── GatewayError
"""

from shop_notify.kernel.errors.application import (
    ApplicationError,
    NoReachableDevicesError,
    RegistrationError,
    TimeoutError,
)
from shop_notify.kernel.errors.base import BaseError, describe_error
from shop_notify.kernel.errors.domain import DomainError, NotFoundError, ValidationError
from shop_notify.kernel.errors.infrastructure import (
    GatewayError,
    InfrastructureError,
    PersistenceError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "GatewayError",
    "InfrastructureError",
    "NoReachableDevicesError",
    "NotFoundError",
    "PersistenceError",
    "RegistrationError",
    "SerializationError",
    "TimeoutError",
    "ValidationError",
    "describe_error",
]
