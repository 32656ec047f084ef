"""Application alerts – AdminAlertDispatcher.

Best-effort fan-out to elevated-role devices, typically triggered as a side
effect of an unrelated action such as order placement.  Nothing here raises
to the caller: the alert record is written first so the in-app feed shows
the alert even when no device can be reached or the gateway call fails.

Token resolution uses two paths.  The primary path filters token rows on
their stored ``role`` snapshot.  When that finds no token, the role
directory is asked for elevated users and their rows are matched by user
id.  Hitting the fallback means the snapshots have drifted from the
directory, so it is logged as a warning.
"""
from __future__ import annotations

from typing import Any

from shop_notify.application.alerts.record import AdminAlertRecord, AdminAlertStore, AlertType
from shop_notify.application.gateway import PushGateway, build_messages
from shop_notify.application.identity import RoleDirectory
from shop_notify.application.tokens import TokenStore, tokens_of
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import describe_error
from shop_notify.kernel.roles import ELEVATED_ROLES
from shop_notify.observability.logging import get_logger

__all__ = ["AdminAlertDispatcher"]

logger = get_logger(__name__)


class AdminAlertDispatcher:
    def __init__(
        self,
        store: TokenStore,
        alerts: AdminAlertStore,
        roles: RoleDirectory | None,
        gateway: PushGateway,
        settings: NotifySettings | None = None,
    ) -> None:
        self._store = store
        self._alerts = alerts
        self._roles = roles
        self._gateway = gateway
        self._settings = settings or NotifySettings()

    async def trigger_admin_alert(
        self,
        type: AlertType | str,  # noqa: A002
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        kind = type.value if isinstance(type, AlertType) else str(type)
        payload = dict(data or {})
        admin_title = f"{self._settings.admin_title_prefix}{title}"
        log = logger.bind(alert_type=kind)

        try:
            alert_id = await self._alerts.create(
                AdminAlertRecord(type=kind, title=admin_title, body=body, data=payload)
            )
            log = log.bind(alert_id=alert_id)
        except Exception as exc:  # noqa: BLE001
            log.error("admin_alert.persist_failed", error=describe_error(exc))

        try:
            tokens = await self.resolve_admin_tokens()
            if not tokens:
                log.info("admin_alert.no_recipients")
                return
            messages = build_messages(
                tokens,
                admin_title,
                body,
                {**payload, "type": "admin_alert", "isRemote": True},
                channel_id=self._settings.channel_id,
            )
            await self._gateway.send_batch(messages)
            log.info("admin_alert.sent", count=len(messages))
        except Exception as exc:  # noqa: BLE001
            log.error("admin_alert.dispatch_failed", error=describe_error(exc))

    async def resolve_admin_tokens(self) -> list[str]:
        """Tokens of elevated users: role snapshot first, role directory second."""
        tokens = tokens_of(await self._store.find_by_roles(ELEVATED_ROLES))
        if tokens or self._roles is None:
            return tokens

        admin_ids = set(await self._roles.find_user_ids_with_roles(ELEVATED_ROLES))
        if not admin_ids:
            return []
        rows = [row for row in await self._store.all() if row.user_id in admin_ids]
        tokens = tokens_of(rows)
        if tokens:
            logger.warning(
                "admin_alert.fallback_path_used",
                user_ids=sorted(row.user_id for row in rows if row.token),
                token_count=len(tokens),
            )
        return tokens

    # ------------------------------------------------------------------
    # Admin feed
    # ------------------------------------------------------------------

    async def recent_alerts(self, limit: int | None = None) -> list[AdminAlertRecord]:
        limit = self._settings.admin_feed_limit if limit is None else limit
        # MongoDB reads limit=0 as "no limit".
        if limit < 1:
            return []
        try:
            return await self._alerts.recent(limit)
        except Exception as exc:  # noqa: BLE001
            logger.error("admin_alert.feed_failed", error=describe_error(exc))
            return []

    async def mark_alert_read(self, alert_id: str, user_id: str) -> bool:
        try:
            await self._alerts.mark_read(alert_id, user_id)
        except Exception as exc:  # noqa: BLE001
            logger.error("admin_alert.mark_read_failed", alert_id=alert_id, error=describe_error(exc))
            return False
        return True
