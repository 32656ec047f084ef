"""Application alerts – admin alert records and elevated-role fan-out."""
from shop_notify.application.alerts.dispatcher import AdminAlertDispatcher
from shop_notify.application.alerts.record import (
    AdminAlertRecord,
    AdminAlertStore,
    AlertType,
    InMemoryAdminAlertStore,
)

__all__ = [
    "AdminAlertDispatcher",
    "AdminAlertRecord",
    "AdminAlertStore",
    "AlertType",
    "InMemoryAdminAlertStore",
]
