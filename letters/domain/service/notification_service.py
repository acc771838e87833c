"""Notification domain service."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import logfire

from letters.domain.value import NotificationKind, RecommenderEmail, StudentId

from .base import Service

# Students are addressed by ID; the relay looks up their address
Recipient = RecommenderEmail | StudentId


def recipient_address(recipient: Recipient) -> str:
    """Relay address: an email, or ``student:<id>`` for a student."""
    if isinstance(recipient, RecommenderEmail):
        return recipient.root
    return f"student:{recipient}"


class NotificationDispatcher(ABC):
    """Delivers workflow emails. Implemented by the adapter layer."""

    @abstractmethod
    async def enqueue(
        self,
        kind: NotificationKind,
        recipient: Recipient,
        payload: dict[str, Any],
    ) -> None:
        """Hand a notification over for delivery.

        Raises:
            Exception: Any delivery failure; callers treat it as non-fatal
        """
        pass


class NotificationService(Service):
    """Fire-and-forget wrapper around the dispatcher.

    Called only after the primary write has committed. Delivery is bounded by
    a short timeout and every failure is logged and dropped, so the outcome
    of create, resend and confirm never depends on email delivery.
    """

    def __init__(
        self, dispatcher: NotificationDispatcher, timeout_seconds: float
    ) -> None:
        """Initialize notification service.

        Args:
            dispatcher: Delivery backend
            timeout_seconds: Upper bound on a single delivery attempt
        """
        self.dispatcher = dispatcher
        self.timeout_seconds = timeout_seconds

    async def notify(
        self,
        kind: NotificationKind,
        recipient: Recipient,
        payload: dict[str, Any],
    ) -> bool:
        """Send a notification, swallowing failures.

        Args:
            kind: Which email to send
            recipient: Recommender email or student ID
            payload: Template data

        Returns:
            True if the dispatcher accepted the notification
        """
        with logfire.span("notification_service.notify", kind=kind.value):
            try:
                await asyncio.wait_for(
                    self.dispatcher.enqueue(kind, recipient, payload),
                    timeout=self.timeout_seconds,
                )
            except asyncio.TimeoutError:
                logfire.error(
                    "Notification delivery timed out",
                    kind=kind.value,
                    timeout_seconds=self.timeout_seconds,
                )
                return False
            except Exception as e:
                logfire.error(
                    "Notification delivery failed",
                    kind=kind.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False

            logfire.info("Notification enqueued", kind=kind.value)
            return True
