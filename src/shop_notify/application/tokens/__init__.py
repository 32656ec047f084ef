"""Application tokens – device token rows and the TokenStore port."""
from shop_notify.application.tokens.model import DeviceMetadata, DeviceToken
from shop_notify.application.tokens.store import InMemoryTokenStore, TokenStore, tokens_of

__all__ = ["DeviceMetadata", "DeviceToken", "InMemoryTokenStore", "TokenStore", "tokens_of"]
