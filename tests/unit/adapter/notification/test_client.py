"""Unit tests for the mail relay notification client."""

import json
from uuid import uuid4

import httpx
import pytest

from letters.adapter.error import NotificationDeliveryError
from letters.adapter.notification.client import HttpNotificationDispatcher
from letters.domain.value import NotificationKind, RecommenderEmail, StudentId

RELAY_URL = "http://relay.test/api/notifications"


@pytest.fixture
def relay(monkeypatch):
    """Route the dispatcher's HTTP calls to an in-process handler.

    Returns the list of captured requests; set ``relay.status`` to change the
    response code.
    """
    real_client = httpx.AsyncClient

    class Relay(list):
        status = 202

    captured = Relay()

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(captured.status, json={"queued": True})

    def client_factory(*args, **kwargs):
        return real_client(*args, transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)
    return captured


class TestHttpNotificationDispatcher:
    """Tests for HttpNotificationDispatcher."""

    @pytest.mark.asyncio
    async def test_enqueue_posts_notification(self, relay):
        """Should post kind, recipient and payload as JSON."""
        # Arrange
        dispatcher = HttpNotificationDispatcher(RELAY_URL, api_key="relay-key")

        # Act
        await dispatcher.enqueue(
            NotificationKind.INVITATION,
            RecommenderEmail("prof@university.edu"),
            {"invitation_url": "http://localhost:3000/invitations/abc"},
        )

        # Assert
        (request,) = relay
        assert str(request.url) == RELAY_URL
        assert request.headers["Authorization"] == "Bearer relay-key"
        assert json.loads(request.content) == {
            "kind": "invitation",
            "recipient": "prof@university.edu",
            "payload": {"invitation_url": "http://localhost:3000/invitations/abc"},
        }

    @pytest.mark.asyncio
    async def test_enqueue_addresses_student_by_id(self, relay):
        """Should let the relay resolve a student's address from their ID."""
        # Arrange
        student_id = StudentId(uuid4())

        # Act
        await HttpNotificationDispatcher(RELAY_URL).enqueue(
            NotificationKind.INVITATION_SENT,
            student_id,
            {"recommender_email": "prof@university.edu"},
        )

        # Assert
        (request,) = relay
        body = json.loads(request.content)
        assert body["kind"] == "invitation_sent"
        assert body["recipient"] == f"student:{student_id}"

    @pytest.mark.asyncio
    async def test_enqueue_without_api_key(self, relay):
        """Should omit the Authorization header when no key is configured."""
        # Act
        await HttpNotificationDispatcher(RELAY_URL).enqueue(
            NotificationKind.RESEND, RecommenderEmail("prof@university.edu"), {}
        )

        # Assert
        assert "Authorization" not in relay[0].headers

    @pytest.mark.asyncio
    async def test_enqueue_rejected_by_relay(self, relay):
        """Should raise when the relay answers with an error status."""
        # Arrange
        relay.status = 500

        # Act & Assert
        with pytest.raises(NotificationDeliveryError):
            await HttpNotificationDispatcher(RELAY_URL).enqueue(
                NotificationKind.CONFIRMATION,
                RecommenderEmail("prof@university.edu"),
                {},
            )
