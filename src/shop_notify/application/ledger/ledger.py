"""Application ledger – NotificationLedger.

The ledger is the only read path the UI consumes: a newest-first list of
in-app notifications scoped to the signed-in user, whether they were raised
locally or arrived as a push.

Persistence rules
~~~~~~~~~~~~~~~~~
* :meth:`NotificationLedger.load` empties the visible list before reading
  the new user's list, so nothing from the previous user stays visible.
* Every mutation writes the whole list back, but only when the current
  identity is the one whose list finished loading.  While a load is in
  flight, or after it failed, writes are suppressed so a stale or foreign
  list can never overwrite the stored one.
* A failed write is logged; the in-memory list stays as mutated.
"""
from __future__ import annotations

import dataclasses
import uuid
from typing import Any

from shop_notify.application.identity import Identity
from shop_notify.application.ledger.model import LocalNotification, NotificationType
from shop_notify.application.ledger.storage import LedgerStorage, storage_key
from shop_notify.application.ledger.translator import CatalogTranslator, Translator
from shop_notify.application.registrar.platform import PushPlatform, ReceivedPush
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import SerializationError, describe_error
from shop_notify.kernel.time import Clock, SystemClock
from shop_notify.observability.logging import get_logger

__all__ = ["LOCAL_ORIGIN_KEY", "NotificationLedger"]

#: Payload flag set on notifications the client scheduled itself.
LOCAL_ORIGIN_KEY = "isLocal"

logger = get_logger(__name__)


class NotificationLedger:
    def __init__(
        self,
        storage: LedgerStorage,
        platform: PushPlatform | None = None,
        translator: Translator | None = None,
        settings: NotifySettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._storage = storage
        self._platform = platform
        self._translator = translator or CatalogTranslator()
        self._settings = settings or NotifySettings()
        self._clock = clock or SystemClock()
        self._entries: list[LocalNotification] = []
        self._current: Identity | None = None
        self._loaded_key: str | None = None
        self._loading = False
        self._generation = 0

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def notifications(self) -> list[LocalNotification]:
        return list(self._entries)

    @property
    def unread_count(self) -> int:
        return sum(1 for entry in self._entries if not entry.read)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def current_user(self) -> Identity | None:
        return self._current

    def _key(self, identity: Identity) -> str:
        return storage_key(identity, self._settings.ledger_key_prefix)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self, identity: Identity | None) -> None:
        self._generation += 1
        generation = self._generation
        self._current = identity
        self._entries = []
        self._loaded_key = None

        if identity is None:
            self._loading = False
            return

        self._loading = True
        key = self._key(identity)
        try:
            saved = await self._storage.get(key)
        except Exception as exc:  # noqa: BLE001
            logger.error("ledger.load_failed", user_id=identity.user_id, error=describe_error(exc))
            if generation == self._generation:
                self._loading = False
            return

        if generation != self._generation:
            # A newer load() superseded this one while storage was read.
            return

        arrived = self._entries
        loaded = self._decode(saved or [])
        known = {entry.id for entry in arrived}
        self._entries = arrived + [entry for entry in loaded if entry.id not in known]
        self._loaded_key = key
        self._loading = False
        logger.debug("ledger.loaded", user_id=identity.user_id, count=len(self._entries))
        if arrived:
            await self._persist()

    def _decode(self, raw: list[Any]) -> list[LocalNotification]:
        entries: list[LocalNotification] = []
        for item in raw:
            try:
                entries.append(LocalNotification.from_dict(item))
            except SerializationError as exc:
                logger.warning("ledger.entry_skipped", error=exc.message)
        return entries

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def append(self, entry: LocalNotification, *, is_local_origin: bool = False) -> bool:
        """Prepend *entry*; local-origin echoes and already-known ids are ignored."""
        if is_local_origin:
            return False
        if any(existing.id == entry.id for existing in self._entries):
            return False
        self._entries = [entry, *self._entries]
        await self._persist()
        return True

    async def handle_received(self, push: ReceivedPush) -> bool:
        data = dict(push.data or {})
        entry = LocalNotification(
            id=push.identifier,
            title=push.title,
            message=push.body,
            type=str(data.get("type") or NotificationType.INFO.value),
            params=data,
            time=self._clock.now().isoformat(),
            read=False,
        )
        appended = await self.append(entry, is_local_origin=bool(data.get(LOCAL_ORIGIN_KEY)))
        logger.debug("ledger.push_received", identifier=push.identifier, appended=appended)
        return appended

    async def add_notification(
        self,
        title_key: str,
        message_key: str,
        type: str = NotificationType.INFO.value,  # noqa: A002
        params: dict[str, Any] | None = None,
    ) -> LocalNotification:
        params = dict(params or {})
        kind = type.value if isinstance(type, NotificationType) else type
        title = self._translator.translate(title_key, params)
        message = self._translator.translate(message_key, params)
        entry = LocalNotification(
            id=uuid.uuid4().hex,
            title=title,
            message=message,
            type=kind,
            params=params,
            time=self._clock.now().isoformat(),
            read=False,
        )
        self._entries = [entry, *self._entries]
        await self._persist()

        if self._platform is not None:
            try:
                await self._platform.schedule_notification(
                    title, message, {**params, "type": kind, LOCAL_ORIGIN_KEY: True}
                )
            except Exception as exc:  # noqa: BLE001
                logger.warning("ledger.display_failed", error=describe_error(exc))
        return entry

    async def mark_read(self, notification_id: str) -> None:
        self._entries = [
            dataclasses.replace(entry, read=True) if entry.id == notification_id else entry
            for entry in self._entries
        ]
        await self._persist()

    async def mark_all_read(self) -> None:
        self._entries = [dataclasses.replace(entry, read=True) for entry in self._entries]
        await self._persist()

    async def clear(self) -> None:
        self._entries = []
        await self._persist()

    async def _persist(self) -> None:
        if self._current is None or self._loading:
            return
        key = self._key(self._current)
        if key != self._loaded_key:
            return
        snapshot = [entry.to_dict() for entry in self._entries]
        try:
            await self._storage.set(key, snapshot)
        except Exception as exc:  # noqa: BLE001
            logger.error("ledger.persist_failed", user_id=self._current.user_id, error=describe_error(exc))
