"""Notification infrastructure providers."""

from dishka import Scope, provide

from letters.adapter.notification.client import HttpNotificationDispatcher
from letters.config import NotificationSettings
from letters.domain.service import NotificationDispatcher
from letters.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider posting to the mail relay."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_dispatcher(
        self, notification_settings: NotificationSettings
    ) -> NotificationDispatcher:
        """Provide mail relay dispatcher."""
        return HttpNotificationDispatcher(
            relay_url=notification_settings.relay_url,
            api_key=notification_settings.relay_api_key,
            timeout_seconds=notification_settings.timeout_seconds,
        )
