"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error."""

    pass


class PasswordHashingError(UtilError):
    """Password could not be hashed or verified."""

    pass
