"""Expo adapter – HTTP push gateway.

Uses ``httpx``; the gateway URL and access token come from
:class:`~shop_notify.config.NotifySettings`.
"""
from shop_notify.adapters.expo.gateway import ExpoPushGateway

__all__ = ["ExpoPushGateway"]
