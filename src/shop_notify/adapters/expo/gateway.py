"""Expo adapter – ExpoPushGateway over httpx."""
from __future__ import annotations

from typing import Any

import httpx

from shop_notify.application.gateway import PushMessage, PushTicket, parse_ticket
from shop_notify.config import NotifySettings
from shop_notify.kernel.errors import GatewayError
from shop_notify.observability.logging import get_logger

__all__ = ["ExpoPushGateway"]

logger = get_logger(__name__)


class ExpoPushGateway:
    """PushGateway posting to the Expo push HTTP API.

    No retries and no timeout beyond the transport's: a failed call is
    raised as :class:`~shop_notify.kernel.errors.GatewayError`.
    """

    def __init__(self, settings: NotifySettings | None = None, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings or NotifySettings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._settings.gateway_timeout_seconds)

    async def __aenter__(self) -> "ExpoPushGateway":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def url(self) -> str:
        return self._settings.gateway_url

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if self._settings.gateway_access_token:
            headers["Authorization"] = f"Bearer {self._settings.gateway_access_token}"
        return headers

    async def _post(self, payload: Any) -> httpx.Response:
        try:
            return await self._client.post(self.url, json=payload, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise GatewayError(self.url, f"Push gateway timed out: POST {self.url}") from exc
        except httpx.HTTPError as exc:
            raise GatewayError(self.url, str(exc) or type(exc).__name__) from exc

    def _status_error(self, response: httpx.Response) -> GatewayError:
        return GatewayError(
            self.url,
            f"HTTP {response.status_code} from POST {self.url}",
            status_code=response.status_code,
        )

    async def send(self, message: PushMessage) -> PushTicket:
        response = await self._post(message.to_payload())
        if response.status_code >= 500:
            raise self._status_error(response)
        try:
            body = response.json()
        except ValueError as exc:
            raise self._status_error(response) from exc
        ticket = parse_ticket(body)
        logger.debug("expo.ticket", status=ticket.status, code=ticket.code)
        return ticket

    async def send_batch(self, messages: list[PushMessage]) -> None:
        if not messages:
            return
        response = await self._post([message.to_payload() for message in messages])
        if response.is_error:
            raise self._status_error(response)
        logger.debug("expo.batch_submitted", count=len(messages), status_code=response.status_code)
