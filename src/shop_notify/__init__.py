"""
shop_notify – push notification and broadcast subsystem.

Import path convention::

    from shop_notify.kernel.errors import GatewayError
    from shop_notify.application.broadcast import BroadcastDispatcher
    from shop_notify.application.ledger import NotificationLedger
    from shop_notify.adapters.expo import ExpoPushGateway
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
