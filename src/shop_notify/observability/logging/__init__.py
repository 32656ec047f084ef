"""Observability – structured logging helpers."""
from shop_notify.observability.logging.factory import JsonLoggerFactory, get_logger
from shop_notify.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
