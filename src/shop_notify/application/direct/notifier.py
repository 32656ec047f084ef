"""Application direct – DirectNotifier sends one push to one user's device."""
from __future__ import annotations

from typing import Any

from shop_notify.application.gateway import PushGateway, PushMessage
from shop_notify.application.tokens import TokenStore
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import describe_error
from shop_notify.observability.logging import get_logger

__all__ = ["ORDER_STATUS_MESSAGES", "DirectNotifier"]

logger = get_logger(__name__)

#: status -> (title, body); ``{ref}`` is the last six characters of the order id.
ORDER_STATUS_MESSAGES: dict[str, tuple[str, str]] = {
    "confirmed": ("Your order is confirmed! 🎉", "Order #{ref} has been confirmed and is being prepared."),
    "processing": ("Your order is being prepared 📦", "We are carefully preparing order #{ref}."),
    "shipped": ("Your order has shipped! 🚚", "Order #{ref} is on its way to you."),
    "out_for_delivery": ("Out for delivery 🛵", "Order #{ref} will arrive very soon, please be ready."),
    "delivered": ("Delivered ✅", "We hope you love your products! Thanks for shopping with us."),
    "cancelled": ("Update about your order ❌", "Sorry, order #{ref} has been cancelled."),
}


class DirectNotifier:
    def __init__(self, store: TokenStore, gateway: PushGateway, settings: NotifySettings | None = None) -> None:
        self._store = store
        self._gateway = gateway
        self._settings = settings or NotifySettings()

    async def send_user_notification(
        self,
        user_id: str | None,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> bool:
        """Push to the device of *user_id*; returns whether the gateway accepted it."""
        if not user_id:
            logger.warning("direct.missing_user_id")
            return False
        try:
            row = await self._store.get(user_id)
            if row is None or not row.token:
                logger.warning("direct.no_token", user_id=user_id)
                return False
            message = PushMessage(
                to=row.token,
                title=title,
                body=body,
                data={**(data or {}), "userId": user_id},
                channel_id=self._settings.channel_id,
            )
            ticket = await self._gateway.send(message)
        except Exception as exc:  # noqa: BLE001
            logger.error("direct.send_failed", user_id=user_id, error=describe_error(exc))
            return False

        if not ticket.ok:
            logger.error("direct.rejected", user_id=user_id, error=ticket.describe())
            return False
        logger.info("direct.sent", user_id=user_id)
        return True

    async def notify_order_status_change(self, user_id: str, order_id: str, status: str) -> bool:
        template = ORDER_STATUS_MESSAGES.get(status)
        if template is None:
            logger.debug("direct.status_ignored", order_id=order_id, status=status)
            return False
        ref = order_id[-6:]
        title, body = (part.format(ref=ref) for part in template)
        return await self.send_user_notification(
            user_id,
            title,
            body,
            {"type": "order_update", "orderId": order_id, "status": status},
        )
