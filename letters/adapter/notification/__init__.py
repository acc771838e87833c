"""Mail relay notification adapter."""

from .client import HttpNotificationDispatcher, MockNotificationDispatcher

__all__ = ["HttpNotificationDispatcher", "MockNotificationDispatcher"]
