"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError, ValueError):
    """Invalid or missing configuration."""

    pass
