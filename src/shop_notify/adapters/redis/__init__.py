"""Redis adapter – per-user ledger storage.

Requires the ``redis`` extra::

    pip install "shop-notify[redis]"
"""

from shop_notify.adapters.redis.ledger_storage import RedisLedgerStorage

__all__ = ["RedisLedgerStorage"]
