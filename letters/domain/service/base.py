"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold invitation workflow rules that span more than one
    entity or need a repository.
    """

    pass
