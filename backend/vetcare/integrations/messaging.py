"""Module: messaging.

Thin httpx client for the WhatsApp gateway used by the reminder job.
"""

import logging

import httpx

from vetcare.core.config import settings

logger = logging.getLogger(__name__)


class MessagingError(RuntimeError):
    pass


class MessagingClient:
    def __init__(
        self,
        base_url: str | None = None,
        sender: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.sender = sender if sender is not None else settings.messaging_sender_number
        self._client = httpx.Client(
            base_url=base_url or settings.messaging_base_url,
            timeout=timeout or settings.messaging_timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "MessagingClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def send_whatsapp(self, to: str, body: str) -> str:
        """Send one message; returns the gateway's message id."""
        if not self.sender:
            raise MessagingError("Messaging sender number is not configured")

        payload = {
            "from": f"whatsapp:{self.sender}",
            "to": to if to.startswith("whatsapp:") else f"whatsapp:{to}",
            "body": body,
        }
        try:
            r = self._client.post("/messages", json=payload)
            r.raise_for_status()
        except httpx.HTTPError as exc:
            raise MessagingError(f"Gateway rejected message to {payload['to']}: {exc}") from exc

        sid = r.json().get("sid", "")
        logger.debug("Message %s accepted for %s", sid, payload["to"])
        return sid
