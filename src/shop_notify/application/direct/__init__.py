"""Application direct – targeted per-user pushes (order status updates)."""
from shop_notify.application.direct.notifier import ORDER_STATUS_MESSAGES, DirectNotifier

__all__ = ["DirectNotifier", "ORDER_STATUS_MESSAGES"]
