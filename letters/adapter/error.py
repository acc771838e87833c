"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class NotificationDeliveryError(ProviderError):
    """The mail relay refused or failed to accept a notification."""

    pass
