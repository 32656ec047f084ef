"""Application ledger – per-user in-app notification list."""
from shop_notify.application.ledger.ledger import LOCAL_ORIGIN_KEY, NotificationLedger
from shop_notify.application.ledger.model import LocalNotification, NotificationType
from shop_notify.application.ledger.storage import InMemoryLedgerStorage, LedgerStorage, storage_key
from shop_notify.application.ledger.translator import CatalogTranslator, Translator

__all__ = [
    "CatalogTranslator",
    "InMemoryLedgerStorage",
    "LOCAL_ORIGIN_KEY",
    "LedgerStorage",
    "LocalNotification",
    "NotificationLedger",
    "NotificationType",
    "Translator",
    "storage_key",
]
