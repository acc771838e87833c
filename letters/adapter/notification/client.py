"""Mail relay notification client.

Hands workflow emails to an HTTP mail relay. The relay owns templating,
retries and the actual SMTP delivery.
"""

import asyncio
from typing import Any

import httpx
import logfire

from letters.adapter.error import NotificationDeliveryError
from letters.domain.service.notification_service import (
    NotificationDispatcher,
    Recipient,
    recipient_address,
)
from letters.domain.value import NotificationKind


class HttpNotificationDispatcher(NotificationDispatcher):
    """Posts notifications to the mail relay webhook."""

    def __init__(
        self,
        relay_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 3.0,
    ) -> None:
        """Initialize dispatcher.

        Args:
            relay_url: Relay endpoint accepting JSON notifications
            api_key: Optional bearer token for the relay
            timeout_seconds: HTTP timeout per request
        """
        self.relay_url = relay_url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    async def enqueue(
        self,
        kind: NotificationKind,
        recipient: Recipient,
        payload: dict[str, Any],
    ) -> None:
        """Post one notification to the relay.

        Raises:
            NotificationDeliveryError: If the relay is unreachable or rejects it
        """
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        body = {
            "kind": kind.value,
            "recipient": recipient_address(recipient),
            "payload": payload,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.relay_url,
                    json=body,
                    headers=headers,
                    timeout=self.timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error("Mail relay HTTP error", kind=kind.value, error=str(e))
            raise NotificationDeliveryError(f"HTTP error posting notification: {e}")

        if response.status_code >= 400:
            logfire.error(
                "Mail relay rejected notification",
                kind=kind.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise NotificationDeliveryError(
                f"Mail relay returned {response.status_code}"
            )

        logfire.info(
            "Notification posted to mail relay",
            kind=kind.value,
            status_code=response.status_code,
        )


class MockNotificationDispatcher(NotificationDispatcher):
    """Records notifications instead of sending them.

    Set ``fail`` to make every call raise, or ``delay_seconds`` to make it
    hang, to exercise the fire-and-forget path.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[NotificationKind, str, dict[str, Any]]] = []
        self.fail = False
        self.delay_seconds = 0.0

    async def enqueue(
        self,
        kind: NotificationKind,
        recipient: Recipient,
        payload: dict[str, Any],
    ) -> None:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.fail:
            raise NotificationDeliveryError("Mock relay failure")
        self.sent.append((kind, recipient_address(recipient), payload))

    def of_kind(self, kind: NotificationKind) -> list[tuple[str, dict[str, Any]]]:
        return [(recipient, payload) for k, recipient, payload in self.sent if k == kind]
