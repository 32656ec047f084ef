"""MongoDB adapter – token, broadcast, admin alert and role stores.

Requires the ``mongodb`` extra::

    pip install "shop-notify[mongodb]"
"""

from shop_notify.adapters.mongodb.alert_store import MongoAdminAlertStore
from shop_notify.adapters.mongodb.broadcast_store import MongoBroadcastStore
from shop_notify.adapters.mongodb.client import open_database
from shop_notify.adapters.mongodb.role_directory import MongoRoleDirectory
from shop_notify.adapters.mongodb.token_store import MongoTokenStore

__all__ = [
    "MongoAdminAlertStore",
    "MongoBroadcastStore",
    "MongoRoleDirectory",
    "MongoTokenStore",
    "open_database",
]
