"""Application gateway – push messages, tickets and the gateway port."""
from shop_notify.application.gateway.message import PushMessage, PushTicket, build_messages, parse_ticket
from shop_notify.application.gateway.port import InMemoryPushGateway, PushGateway

__all__ = [
    "InMemoryPushGateway",
    "PushGateway",
    "PushMessage",
    "PushTicket",
    "build_messages",
    "parse_ticket",
]
