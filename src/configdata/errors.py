"""Typed exceptions for configuration data resolution.

This module defines specific exception types for the different ways in which
resolving a configuration location can fail, making it easier to handle and
debug issues.
"""

__all__ = [
    "ConfigDataError",
    "ConfigDataNotFoundError",
    "ConfigDataLocationNotFoundError",
    "ConfigDataResourceNotFoundError",
    "UnsupportedConfigDataLocationError",
    "UnknownFileExtensionError",
    "InvalidConfigDataPropertyError",
    "ConfigDataResolutionError",
]


class ConfigDataError(Exception):
    """Base exception for all configuration data errors."""


class ConfigDataNotFoundError(ConfigDataError):
    """Raised when configuration data could not be found."""


class ConfigDataLocationNotFoundError(ConfigDataNotFoundError):
    """Raised when a mandatory location does not match anything."""

    def __init__(self, location, message=None):
        """Initialize with the missing location.

        Parameters
        ----------
        location : ConfigDataLocation
            Location which could not be found
        message : str, optional
            Detailed message, a generic one is built if not provided
        """
        self.location = location
        if message is None:
            message = f"Config data location '{location}' cannot be found"
        super().__init__(message)


class ConfigDataResourceNotFoundError(ConfigDataNotFoundError):
    """Raised when a resolved resource does not exist in the backing store."""

    def __init__(self, resource, location=None):
        """Initialize with the missing resource.

        Parameters
        ----------
        resource : object
            Resource which does not exist
        location : ConfigDataLocation, optional
            Location the resource was resolved from
        """
        self.resource = resource
        self.location = location
        message = f"Config data resource '{resource}'"
        if location is not None:
            message += f" via location '{location}'"
        super().__init__(message + " cannot be found")

    @classmethod
    def throw_if_does_not_exist(cls, resource, location=None):
        """Raise if the resource reports that it does not exist.

        Parameters
        ----------
        resource : object
            Resource exposing an `exists()` method
        location : ConfigDataLocation, optional
            Location the resource was resolved from
        """
        if not resource.exists():
            raise cls(resource, location)


class UnsupportedConfigDataLocationError(ConfigDataError):
    """Raised when no registered resolver accepts a location."""

    def __init__(self, location):
        self.location = location
        super().__init__(f"Unsupported config data location '{location}'")


class UnknownFileExtensionError(ConfigDataError):
    """Raised when an explicit file has an extension no format loader knows."""

    def __init__(self, location, file):
        """Initialize with the offending location and file.

        Parameters
        ----------
        location : ConfigDataLocation
            Location which named the file
        file : str
            File name (after any extension hint was applied)
        """
        self.location = location
        self.file = file
        super().__init__(
            f"File extension of '{file}' (from location '{location}') is not "
            "known to any format loader. If the location is meant to "
            "reference a directory, it must end in '/' or the OS separator"
        )


class InvalidConfigDataPropertyError(ConfigDataError):
    """Raised when a bound configuration property has an invalid value."""

    def __init__(self, key, value, message):
        self.key = key
        self.value = value
        super().__init__(f"Property '{key}' is invalid: {message}")


class ConfigDataResolutionError(ConfigDataError):
    """Raised when an unexpected error occurs while resolving a location.

    The underlying exception is chained as the cause.
    """

    def __init__(self, location):
        self.location = location
        super().__init__(f"Unable to load config data from '{location}'")
