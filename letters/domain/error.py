"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input rejected before any write.

    Attributes:
        errors: Per-field problems, each ``{"field": ..., "message": ...}``
    """

    def __init__(self, message: str, errors: list[dict[str, str]] | None = None):
        self.errors = errors or []
        super().__init__(message)


class ConflictError(DomainError):
    """An active invitation already exists for this application and email."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found.

    Also used when the resource exists but is not visible to the caller, so
    that existence is never disclosed.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidStateError(DomainError):
    """The operation is illegal for the invitation's current status."""

    def __init__(self, message: str, current_status: str | None = None):
        self.current_status = current_status
        super().__init__(message)


class UnauthorizedError(DomainError):
    """Caller could not be authenticated."""

    pass


class InvalidEmailError(ValidationError):
    """Recommender email is malformed."""

    pass
